"""
Repository Pattern for Catalog Lookups

- ProductCatalog / CouponCatalog: interfaces the cart core depends on
- ProductRepository: product price, stock and descriptive fields (Supabase)
- CouponRepository: coupon discount percentage (Supabase)
"""
from .base import ProductCatalog, CouponCatalog
from .product_repo import ProductRepository
from .coupon_repo import CouponRepository

__all__ = [
    "ProductCatalog",
    "CouponCatalog",
    "ProductRepository",
    "CouponRepository",
]
