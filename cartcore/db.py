"""
Database Module - Supabase and Redis client factories

Provides:
- Async Supabase client for the product and coupon catalogs
- Upstash Redis client for cart item storage
- Redis key layout and TTL constants

Clients are created per call and handed to the components that need them;
nothing here is cached at module level.
"""

import os

from supabase._async.client import AsyncClient
from supabase._async.client import create_client as acreate_client
from upstash_redis.asyncio import Redis as AsyncRedis


def _env(name: str) -> str:
    return os.environ.get(name, "")


async def create_supabase() -> AsyncClient:
    """
    Create an async Supabase client from SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY.

    Raises:
        ValueError: if either variable is unset
    """
    url = _env("SUPABASE_URL")
    key = _env("SUPABASE_SERVICE_ROLE_KEY")
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
    return await acreate_client(url, key)


def create_redis() -> AsyncRedis:
    """
    Create an async Upstash Redis client.

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN

    Raises:
        ValueError: if either variable is unset
    """
    url = _env("UPSTASH_REDIS_REST_URL")
    token = _env("UPSTASH_REDIS_REST_TOKEN")
    if not url or not token:
        raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
    return AsyncRedis(url=url, token=token)


class RedisKeys:
    """Redis key prefixes for cart storage."""

    CART_ITEMS = "cart_items:"  # Hash cart_items:{cart_id} -> {product_id: quantity}
    CART_INDEX = "cart_items:index"  # Set of cart ids with at least one item

    @staticmethod
    def cart_key(cart_id: str) -> str:
        return f"{RedisKeys.CART_ITEMS}{cart_id}"


class Tables:
    """Supabase table names used by the catalogs."""

    PRODUCTS = "products"
    COUPONS = "coupons"


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    CART = int(os.environ.get("CART_TTL_SECONDS", "86400"))  # 24 hours


__all__ = [
    "create_supabase",
    "create_redis",
    "RedisKeys",
    "Tables",
    "TTL",
]
