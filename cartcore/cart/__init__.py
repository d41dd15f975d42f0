"""Cart package: derived views, storage, manager, aggregator, validator and facade."""
from .models import CartLine, CartLineDetails
from .storage import CartItemStore, InMemoryCartItemStore, RedisCartItemStore
from .manager import CartItemManager
from .aggregator import CartAggregator
from .validator import CartValidator
from .service import CartService, build_cart_service

__all__ = [
    "CartLine",
    "CartLineDetails",
    "CartItemStore",
    "InMemoryCartItemStore",
    "RedisCartItemStore",
    "CartItemManager",
    "CartAggregator",
    "CartValidator",
    "CartService",
    "build_cart_service",
]
