"""Pytest configuration and fixtures"""
import asyncio
import os
from decimal import Decimal
from typing import Optional
from unittest.mock import AsyncMock, Mock

import pytest

from cartcore.cart import CartService, InMemoryCartItemStore
from cartcore.cart.storage import INCREMENT_SCRIPT
from cartcore.services.models import Coupon, Product
from cartcore.services.repositories import CouponCatalog, ProductCatalog

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")


class FakeProductCatalog(ProductCatalog):
    """Dict-backed product catalog that records lookups."""

    def __init__(self, products: list[Product]):
        self.products = {p.product_id: p for p in products}
        self.lookups: list[str] = []

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        self.lookups.append(product_id)
        return self.products.get(product_id)


class FakeCouponCatalog(CouponCatalog):
    """Dict-backed coupon catalog."""

    def __init__(self, coupons: list[Coupon]):
        self.coupons = {c.coupon_id: c for c in coupons}

    async def get_by_id(self, coupon_id: str) -> Optional[Coupon]:
        return self.coupons.get(coupon_id)


@pytest.fixture
def sample_products():
    """Two products: one well stocked, one nearly sold out."""
    return [
        Product(
            product_id="1",
            name="Espresso Beans",
            description="1kg bag",
            price=Decimal("10"),
            stock=5,
            image_url="https://cdn.test/beans.png",
        ),
        Product(
            product_id="2",
            name="Milk Frother",
            description="Handheld",
            price=Decimal("20"),
            stock=1,
        ),
    ]


@pytest.fixture
def sample_coupons():
    return [
        Coupon(coupon_id="SAVE10", discount_pct=Decimal("0.1")),
        Coupon(coupon_id="HALF", discount_pct=Decimal("0.5")),
        Coupon(coupon_id="FREE", discount_pct=Decimal("1")),
    ]


@pytest.fixture
def store():
    return InMemoryCartItemStore()


@pytest.fixture
def product_catalog(sample_products):
    return FakeProductCatalog(sample_products)


@pytest.fixture
def coupon_catalog(sample_coupons):
    return FakeCouponCatalog(sample_coupons)


@pytest.fixture
def cart_service(store, product_catalog, coupon_catalog):
    return CartService(store, product_catalog, coupon_catalog)


@pytest.fixture
def mock_redis():
    """Mock Upstash async Redis client"""
    redis = Mock()
    for method in (
        "hget", "hsetnx", "hset", "hexists", "hdel", "hgetall", "hlen",
        "delete", "expire", "sadd", "srem", "smembers", "eval",
    ):
        setattr(redis, method, AsyncMock())
    return redis


class YieldingRedis:
    """
    In-memory stand-in for the async Upstash client.

    Every command awaits asyncio.sleep(0) first, so concurrent callers
    interleave between round trips the way they do over the network.
    eval() runs the cart increment script as a single command.
    """

    def __init__(self):
        self.hashes: dict[str, dict[str, str]] = {}
        self.sets: dict[str, set] = {}
        self.commands: list[str] = []

    async def _round_trip(self, name: str) -> None:
        self.commands.append(name)
        await asyncio.sleep(0)

    async def hget(self, key, field):
        await self._round_trip("hget")
        return self.hashes.get(key, {}).get(field)

    async def hsetnx(self, key, field, value):
        await self._round_trip("hsetnx")
        fields = self.hashes.setdefault(key, {})
        if field in fields:
            return 0
        fields[field] = str(value)
        return 1

    async def hexists(self, key, field):
        await self._round_trip("hexists")
        return field in self.hashes.get(key, {})

    async def hset(self, key, field, value):
        await self._round_trip("hset")
        self.hashes.setdefault(key, {})[field] = str(value)
        return 1

    async def expire(self, key, seconds):
        await self._round_trip("expire")
        return 1

    async def sadd(self, key, *members):
        await self._round_trip("sadd")
        self.sets.setdefault(key, set()).update(members)
        return len(members)

    async def eval(self, script, keys=None, args=None):
        await self._round_trip("eval")
        assert script == INCREMENT_SCRIPT
        [key] = keys
        field, delta, _ttl = args
        current = self.hashes.get(key, {}).get(field)
        if current is None:
            return [0, 0]
        current = int(current)
        if current + int(delta) < 0:
            return [-1, current]
        self.hashes[key][field] = str(current + int(delta))
        return [1, current + int(delta)]


@pytest.fixture
def yielding_redis():
    return YieldingRedis()


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client; set table_mock.execute.return_value.data per test"""
    client = Mock()

    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = table_mock
    return client
