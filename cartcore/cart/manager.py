"""Cart item mutations on top of a CartItemStore."""
from typing import Optional

from cartcore.errors import (
    ERROR_QUANTITY_NOT_INTEGER,
    ERROR_QUANTITY_NOT_POSITIVE,
    DuplicateItemError,
    InvalidQuantityError,
)
from cartcore.logging import get_logger, sanitize_id_for_logging
from cartcore.services.models import CartItem
from .storage import CartItemStore

logger = get_logger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class CartItemManager:
    """
    Create, update and delete cart items.

    Quantities accumulate: update_quantity adds a delta to the stored value.
    Never touches the product or coupon catalogs.
    """

    def __init__(self, store: CartItemStore):
        self.store = store

    async def add_item(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        """
        Create a new cart item.

        Raises:
            InvalidQuantityError: quantity is not a positive integer
            DuplicateItemError: the cart already holds this product;
                use update_quantity to accumulate
        """
        if not _is_int(quantity) or quantity < 1:
            raise InvalidQuantityError(ERROR_QUANTITY_NOT_POSITIVE, quantity)

        try:
            item = await self.store.create(cart_id, product_id, quantity)
        except DuplicateItemError:
            logger.warning(
                f"Duplicate add rejected: cart={sanitize_id_for_logging(cart_id)} "
                f"product={sanitize_id_for_logging(product_id)}"
            )
            raise

        logger.info(
            f"Cart item added: cart={sanitize_id_for_logging(cart_id)} "
            f"product={sanitize_id_for_logging(product_id)} quantity={quantity}"
        )
        return item

    async def update_quantity(self, cart_id: str, product_id: str, delta: int) -> CartItem:
        """
        Add ``delta`` to the stored quantity.

        A negative delta decreases the quantity. The result may be 0 (the row
        is kept) but never negative.

        Raises:
            CartItemNotFoundError: no such cart item
            InvalidQuantityError: delta is not an integer, or the result would be negative
        """
        if not _is_int(delta):
            raise InvalidQuantityError(ERROR_QUANTITY_NOT_INTEGER, delta)

        try:
            item = await self.store.increment(cart_id, product_id, delta)
        except InvalidQuantityError as e:
            logger.warning(
                f"Quantity update rejected: cart={sanitize_id_for_logging(cart_id)} "
                f"product={sanitize_id_for_logging(product_id)} delta={delta}: {e}"
            )
            raise

        logger.info(
            f"Cart item updated: cart={sanitize_id_for_logging(cart_id)} "
            f"product={sanitize_id_for_logging(product_id)} quantity={item.quantity}"
        )
        return item

    async def remove_item(self, cart_id: str, product_id: str) -> None:
        """Delete one cart item. Missing items are ignored."""
        removed = await self.store.delete(cart_id, product_id)
        if removed:
            logger.info(
                f"Cart item removed: cart={sanitize_id_for_logging(cart_id)} "
                f"product={sanitize_id_for_logging(product_id)}"
            )

    async def clear_cart(self, cart_id: str) -> None:
        """Delete every item of a cart. Clearing an empty cart is a no-op."""
        count = await self.store.delete_by_cart(cart_id)
        if count:
            logger.info(f"Cart cleared: cart={sanitize_id_for_logging(cart_id)} items={count}")

    async def list_items(self, cart_id: str) -> list[CartItem]:
        """All items of a cart, unordered."""
        return await self.store.list_by_cart(cart_id)

    async def get_item(self, cart_id: str, product_id: str) -> Optional[CartItem]:
        """The raw cart item row, or None."""
        return await self.store.get(cart_id, product_id)

    async def list_all_items(self) -> list[CartItem]:
        """Every cart item in the store."""
        return await self.store.list_all()
