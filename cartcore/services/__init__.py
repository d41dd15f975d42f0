"""Collaborator-facing services: money helpers, record models, catalog repositories."""
from .models import CartItem, Coupon, Product
from .repositories import CouponCatalog, CouponRepository, ProductCatalog, ProductRepository

__all__ = [
    "CartItem",
    "Coupon",
    "Product",
    "CouponCatalog",
    "CouponRepository",
    "ProductCatalog",
    "ProductRepository",
]
