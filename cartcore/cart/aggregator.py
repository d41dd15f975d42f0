"""
Cart aggregation.

Joins cart items with catalog products and prices them with an optional
coupon discount. Every call reads fresh data; nothing is cached.
"""
import asyncio
from decimal import Decimal
from typing import Optional

from cartcore.errors import ProductNotFoundError
from cartcore.logging import get_logger, sanitize_id_for_logging
from cartcore.services.models import CartItem, Product
from cartcore.services.money import ZERO
from cartcore.services.repositories import CouponCatalog, ProductCatalog
from .models import CartLine, CartLineDetails
from .storage import CartItemStore

logger = get_logger(__name__)


async def join_products(
    catalog: ProductCatalog, items: list[CartItem]
) -> list[tuple[CartItem, Product]]:
    """
    Inner join of cart items with their products.

    Products are fetched in parallel. An item whose product cannot be
    resolved raises ProductNotFoundError instead of being dropped.
    """
    if not items:
        return []

    products = await asyncio.gather(*[catalog.get_by_id(item.product_id) for item in items])

    joined = []
    for item, product in zip(items, products):
        if product is None:
            logger.error(
                f"Cart {sanitize_id_for_logging(item.cart_id)} references unknown product "
                f"{sanitize_id_for_logging(item.product_id)}"
            )
            raise ProductNotFoundError(item.product_id, item.cart_id)
        joined.append((item, product))
    return joined


class CartAggregator:
    """Priced views of a cart."""

    def __init__(self, store: CartItemStore, products: ProductCatalog, coupons: CouponCatalog):
        self.store = store
        self.products = products
        self.coupons = coupons

    async def resolve_discount(self, coupon_id: Optional[str]) -> Decimal:
        """
        Discount fraction for a coupon id.

        No coupon id, or an id the catalog does not know, means no discount.
        """
        if coupon_id is None:
            return ZERO

        coupon = await self.coupons.get_by_id(coupon_id)
        if coupon is None:
            logger.info(f"Coupon {sanitize_id_for_logging(coupon_id)} not found, applying no discount")
            return ZERO
        return coupon.discount_pct

    async def get_cart_lines(self, cart_id: str, coupon_id: Optional[str] = None) -> list[CartLine]:
        """Every line of the cart with its discounted total. Empty for an unknown cart."""
        items = await self.store.list_by_cart(cart_id)
        if not items:
            return []

        discount = await self.resolve_discount(coupon_id)
        joined = await join_products(self.products, items)
        return [CartLine.join(item, product, discount) for item, product in joined]

    async def get_cart_total(self, cart_id: str, coupon_id: Optional[str] = None) -> Decimal:
        """Sum of quantity * price * (1 - discount) over the cart; 0 when empty."""
        lines = await self.get_cart_lines(cart_id, coupon_id)
        return sum((line.total for line in lines), ZERO)

    async def get_line(self, cart_id: str, product_id: str) -> Optional[CartLineDetails]:
        """
        One cart item joined with its product, without any discount.

        Returns None when the cart item does not exist.

        Raises:
            ProductNotFoundError: the item exists but its product does not
        """
        item = await self.store.get(cart_id, product_id)
        if item is None:
            return None

        [(item, product)] = await join_products(self.products, [item])
        return CartLineDetails.join(item, product)
