"""Coupon Repository - discount lookups."""
from typing import Optional

from .base import BaseRepository, CouponCatalog
from cartcore.db import Tables
from cartcore.services.models import Coupon


class CouponRepository(BaseRepository, CouponCatalog):
    """Coupon catalog backed by the Supabase ``coupons`` table."""

    async def get_by_id(self, coupon_id: str) -> Optional[Coupon]:
        """Get coupon by ID, or None if it does not exist."""
        result = await self.client.table(Tables.COUPONS).select(
            "coupon_id, discount_pct"
        ).eq("coupon_id", coupon_id).limit(1).execute()

        return Coupon(**result.data[0]) if result.data else None
