"""
Cart Service

Facade over CartItemManager, CartAggregator and CartValidator, built from
explicitly passed collaborators.

Usage:
    from cartcore.cart import CartService, build_cart_service

    # Wire your own collaborators
    service = CartService(store, product_catalog, coupon_catalog)

    # Or the default Redis + Supabase wiring, from environment variables
    service = await build_cart_service()

    await service.add_item("cart-1", "prod-1", 2)
    total = await service.get_cart_total("cart-1", coupon_id="SPRING10")
"""
from decimal import Decimal
from typing import Optional

from cartcore.db import create_redis, create_supabase
from cartcore.services.models import CartItem
from cartcore.services.repositories import (
    CouponCatalog,
    CouponRepository,
    ProductCatalog,
    ProductRepository,
)
from .aggregator import CartAggregator
from .manager import CartItemManager
from .models import CartLine, CartLineDetails
from .storage import CartItemStore, RedisCartItemStore
from .validator import CartValidator


class CartService:
    """Single entry point for cart mutations, priced views and stock checks."""

    def __init__(self, store: CartItemStore, products: ProductCatalog, coupons: CouponCatalog):
        self.manager = CartItemManager(store)
        self.aggregator = CartAggregator(store, products, coupons)
        self.validator = CartValidator(store, products)

    # ==================== MUTATIONS ====================

    async def add_item(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        return await self.manager.add_item(cart_id, product_id, quantity)

    async def update_quantity(self, cart_id: str, product_id: str, delta: int) -> CartItem:
        return await self.manager.update_quantity(cart_id, product_id, delta)

    async def remove_item(self, cart_id: str, product_id: str) -> None:
        await self.manager.remove_item(cart_id, product_id)

    async def clear_cart(self, cart_id: str) -> None:
        await self.manager.clear_cart(cart_id)

    # ==================== RAW ROWS ====================

    async def list_items(self, cart_id: str) -> list[CartItem]:
        return await self.manager.list_items(cart_id)

    async def get_item(self, cart_id: str, product_id: str) -> Optional[CartItem]:
        return await self.manager.get_item(cart_id, product_id)

    async def list_all_items(self) -> list[CartItem]:
        return await self.manager.list_all_items()

    # ==================== PRICED VIEWS ====================

    async def get_cart_lines(self, cart_id: str, coupon_id: Optional[str] = None) -> list[CartLine]:
        return await self.aggregator.get_cart_lines(cart_id, coupon_id)

    async def get_cart_total(self, cart_id: str, coupon_id: Optional[str] = None) -> Decimal:
        return await self.aggregator.get_cart_total(cart_id, coupon_id)

    async def get_line(self, cart_id: str, product_id: str) -> Optional[CartLineDetails]:
        return await self.aggregator.get_line(cart_id, product_id)

    # ==================== STOCK ====================

    async def find_out_of_stock_lines(self, cart_id: str) -> list[str]:
        return await self.validator.find_out_of_stock_lines(cart_id)

    async def is_fulfillable(self, cart_id: str) -> bool:
        return await self.validator.is_fulfillable(cart_id)


async def build_cart_service() -> CartService:
    """
    Build a CartService backed by Upstash Redis (cart items) and Supabase
    (products, coupons). New clients are created on every call.

    Raises:
        ValueError: if the Redis or Supabase environment variables are missing
    """
    redis = create_redis()
    supabase = await create_supabase()
    return CartService(
        store=RedisCartItemStore(redis),
        products=ProductRepository(supabase),
        coupons=CouponRepository(supabase),
    )
