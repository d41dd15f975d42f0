"""Base repository with shared Supabase client, and the catalog interfaces."""
from abc import ABC, abstractmethod
from typing import Optional

from supabase._async.client import AsyncClient

from cartcore.services.models import Coupon, Product


class ProductCatalog(ABC):
    """Read-only product lookup used by the cart core."""

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Return the product, or None if it does not exist."""


class CouponCatalog(ABC):
    """Read-only coupon lookup used by the cart core."""

    @abstractmethod
    async def get_by_id(self, coupon_id: str) -> Optional[Coupon]:
        """Return the coupon, or None if it does not exist."""


class BaseRepository:
    """Base class for Supabase-backed repositories.

    Holds the async Supabase client; every query is awaited.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client
