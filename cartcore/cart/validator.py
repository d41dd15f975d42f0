"""Stock checks for a cart."""
from cartcore.logging import get_logger, sanitize_id_for_logging
from cartcore.services.repositories import ProductCatalog
from .aggregator import join_products
from .models import CartLineDetails
from .storage import CartItemStore

logger = get_logger(__name__)


class CartValidator:
    """Decides whether current stock covers every line of a cart."""

    def __init__(self, store: CartItemStore, products: ProductCatalog):
        self.store = store
        self.products = products

    async def find_out_of_stock_lines(self, cart_id: str) -> list[str]:
        """Product names of lines whose quantity exceeds stock. Empty means fully stocked."""
        items = await self.store.list_by_cart(cart_id)
        joined = await join_products(self.products, items)

        lines = [CartLineDetails.join(item, product) for item, product in joined]
        return [line.name for line in lines if not line.in_stock]

    async def is_fulfillable(self, cart_id: str) -> bool:
        """True iff no line is out of stock. An empty cart is fulfillable."""
        out_of_stock = await self.find_out_of_stock_lines(cart_id)
        if out_of_stock:
            logger.info(
                f"Cart {sanitize_id_for_logging(cart_id)} not fulfillable: "
                f"{len(out_of_stock)} line(s) out of stock"
            )
        return not out_of_stock
