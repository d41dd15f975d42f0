"""
Cart Errors

Message constants and the exception hierarchy raised by the cart core.
Collaborator failures (Redis, Supabase) are not wrapped and propagate as-is.
"""

# Cart item errors
ERROR_CART_ITEM_NOT_FOUND = "Cart item not found"
ERROR_CART_ITEM_EXISTS = "Cart item already exists"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Quantity errors
ERROR_QUANTITY_NOT_POSITIVE = "quantity must be a positive integer"
ERROR_QUANTITY_NOT_INTEGER = "quantity delta must be an integer"
ERROR_QUANTITY_NEGATIVE = "Resulting quantity would be negative"


class CartError(Exception):
    """Base class for all cart core errors."""


class NotFoundError(CartError, LookupError):
    """A referenced record is absent where it is required."""


class CartItemNotFoundError(NotFoundError):
    """No cart item exists for the given (cart_id, product_id) key."""

    def __init__(self, cart_id: str, product_id: str):
        self.cart_id = cart_id
        self.product_id = product_id
        super().__init__(f"{ERROR_CART_ITEM_NOT_FOUND}: cart_id={cart_id}, product_id={product_id}")


class ProductNotFoundError(NotFoundError):
    """A cart item references a product the catalog cannot resolve."""

    def __init__(self, product_id: str, cart_id: str | None = None):
        self.product_id = product_id
        self.cart_id = cart_id
        message = f"{ERROR_PRODUCT_NOT_FOUND}: product_id={product_id}"
        if cart_id is not None:
            message += f" (referenced by cart {cart_id})"
        super().__init__(message)


class DuplicateItemError(CartError):
    """A cart item for the given key already exists."""

    def __init__(self, cart_id: str, product_id: str):
        self.cart_id = cart_id
        self.product_id = product_id
        super().__init__(f"{ERROR_CART_ITEM_EXISTS}: cart_id={cart_id}, product_id={product_id}")


class InvalidQuantityError(CartError, ValueError):
    """A quantity or quantity delta was rejected."""

    def __init__(self, message: str, quantity: int | None = None):
        self.quantity = quantity
        super().__init__(message)


__all__ = [
    "ERROR_CART_ITEM_NOT_FOUND",
    "ERROR_CART_ITEM_EXISTS",
    "ERROR_PRODUCT_NOT_FOUND",
    "ERROR_QUANTITY_NOT_POSITIVE",
    "ERROR_QUANTITY_NOT_INTEGER",
    "ERROR_QUANTITY_NEGATIVE",
    "CartError",
    "NotFoundError",
    "CartItemNotFoundError",
    "ProductNotFoundError",
    "DuplicateItemError",
    "InvalidQuantityError",
]
