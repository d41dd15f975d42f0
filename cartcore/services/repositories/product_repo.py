"""Product Repository - read-only product catalog lookups."""
from typing import Optional

from .base import BaseRepository, ProductCatalog
from cartcore.db import Tables
from cartcore.services.models import Product


class ProductRepository(BaseRepository, ProductCatalog):
    """Product catalog backed by the Supabase ``products`` table."""

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID, or None if the catalog has no such product."""
        result = await self.client.table(Tables.PRODUCTS).select(
            "product_id, name, description, price, stock, image_url"
        ).eq("product_id", product_id).limit(1).execute()

        return Product(**result.data[0]) if result.data else None

