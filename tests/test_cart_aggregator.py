"""Tests for CartAggregator"""
from decimal import Decimal

import pytest

from cartcore.cart import CartAggregator
from cartcore.errors import ProductNotFoundError


@pytest.fixture
def aggregator(store, product_catalog, coupon_catalog):
    return CartAggregator(store, product_catalog, coupon_catalog)


async def _fill(store):
    await store.create("cart-1", "1", 3)
    await store.create("cart-1", "2", 2)


class TestCartLines:
    """Tests for get_cart_lines."""

    @pytest.mark.asyncio
    async def test_empty_cart(self, aggregator, product_catalog):
        assert await aggregator.get_cart_lines("cart-empty") == []
        assert await aggregator.get_cart_lines("cart-empty", "SAVE10") == []
        assert product_catalog.lookups == []

    @pytest.mark.asyncio
    async def test_lines_without_coupon(self, aggregator, store):
        await _fill(store)

        lines = {line.product_id: line for line in await aggregator.get_cart_lines("cart-1")}

        assert lines["1"].name == "Espresso Beans"
        assert lines["1"].image_url == "https://cdn.test/beans.png"
        assert lines["1"].total == Decimal("30")
        assert lines["2"].total == Decimal("40")

    @pytest.mark.asyncio
    async def test_lines_with_coupon(self, aggregator, store):
        await _fill(store)

        lines = {line.product_id: line for line in await aggregator.get_cart_lines("cart-1", "SAVE10")}

        assert lines["1"].discount_pct == Decimal("0.1")
        assert lines["1"].total == Decimal("27")
        assert lines["2"].total == Decimal("36")

    @pytest.mark.asyncio
    async def test_unknown_coupon_means_no_discount(self, aggregator, store):
        await _fill(store)

        lines = await aggregator.get_cart_lines("cart-1", "EXPIRED")

        assert all(line.discount_pct == 0 for line in lines)

    @pytest.mark.asyncio
    async def test_missing_product_raises(self, aggregator, store):
        """Test an item pointing at a deleted product is surfaced, not dropped."""
        await _fill(store)
        await store.create("cart-1", "ghost", 1)

        with pytest.raises(ProductNotFoundError) as exc_info:
            await aggregator.get_cart_lines("cart-1")

        assert exc_info.value.product_id == "ghost"
        assert exc_info.value.cart_id == "cart-1"

    @pytest.mark.asyncio
    async def test_zero_quantity_line_kept(self, aggregator, store):
        await store.create("cart-1", "1", 0)

        [line] = await aggregator.get_cart_lines("cart-1")

        assert line.quantity == 0
        assert line.total == 0


class TestCartTotal:
    """Tests for get_cart_total."""

    @pytest.mark.asyncio
    async def test_empty_cart_total_is_zero(self, aggregator):
        total = await aggregator.get_cart_total("cart-empty")

        assert total == 0
        assert isinstance(total, Decimal)

    @pytest.mark.asyncio
    async def test_total_without_coupon(self, aggregator, store):
        await _fill(store)

        # 3 * 10 + 2 * 20
        assert await aggregator.get_cart_total("cart-1") == Decimal("70")

    @pytest.mark.asyncio
    async def test_total_with_coupon(self, aggregator, store):
        await _fill(store)

        assert await aggregator.get_cart_total("cart-1", "SAVE10") == Decimal("63")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("coupon_id", ["SAVE10", "HALF", "FREE"])
    async def test_discount_scales_total(self, aggregator, store, coupon_catalog, coupon_id):
        """Test total with a coupon equals the undiscounted total times (1 - pct)."""
        await _fill(store)
        pct = coupon_catalog.coupons[coupon_id].discount_pct

        undiscounted = await aggregator.get_cart_total("cart-1")
        discounted = await aggregator.get_cart_total("cart-1", coupon_id)

        assert discounted == undiscounted * (1 - pct)

    @pytest.mark.asyncio
    async def test_increasing_quantity_never_lowers_total(self, aggregator, store):
        await _fill(store)
        totals = []
        for _ in range(3):
            totals.append(await aggregator.get_cart_total("cart-1", "HALF"))
            item = await store.get("cart-1", "2")
            await store.update("cart-1", "2", item.quantity + 1)

        assert totals == sorted(totals)
        assert totals[0] < totals[-1]

    @pytest.mark.asyncio
    async def test_total_reads_fresh_prices(self, aggregator, store, product_catalog):
        """Test totals are recomputed on every call, never cached."""
        await _fill(store)
        assert await aggregator.get_cart_total("cart-1") == Decimal("70")

        product_catalog.products["1"] = product_catalog.products["1"].model_copy(
            update={"price": Decimal("11")}
        )

        assert await aggregator.get_cart_total("cart-1") == Decimal("73")


class TestGetLine:
    """Tests for get_line."""

    @pytest.mark.asyncio
    async def test_get_line(self, aggregator, store):
        await _fill(store)

        details = await aggregator.get_line("cart-1", "2")

        assert details.name == "Milk Frother"
        assert details.quantity == 2
        assert details.price == Decimal("20")
        assert details.stock == 1

    @pytest.mark.asyncio
    async def test_get_line_missing_item(self, aggregator, product_catalog):
        assert await aggregator.get_line("cart-1", "1") is None
        assert product_catalog.lookups == []

    @pytest.mark.asyncio
    async def test_get_line_missing_product(self, aggregator, store):
        await store.create("cart-1", "ghost", 1)

        with pytest.raises(ProductNotFoundError):
            await aggregator.get_line("cart-1", "ghost")


class TestResolveDiscount:
    """Tests for resolve_discount."""

    @pytest.mark.asyncio
    async def test_no_coupon(self, aggregator):
        assert await aggregator.resolve_discount(None) == 0

    @pytest.mark.asyncio
    async def test_known_coupon(self, aggregator):
        assert await aggregator.resolve_discount("HALF") == Decimal("0.5")

    @pytest.mark.asyncio
    async def test_unknown_coupon(self, aggregator):
        assert await aggregator.resolve_discount("NOPE") == 0
