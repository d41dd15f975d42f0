"""
Cart item storage.

CartItemStore is the interface the cart core depends on; it holds
(cart_id, product_id) -> quantity rows. Two implementations:

- InMemoryCartItemStore: process-local dict, for tests and local runs
- RedisCartItemStore: one Upstash Redis hash per cart
"""
import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from cartcore.db import RedisKeys, TTL
from cartcore.errors import (
    ERROR_QUANTITY_NEGATIVE,
    CartItemNotFoundError,
    DuplicateItemError,
    InvalidQuantityError,
)
from cartcore.logging import get_logger, sanitize_id_for_logging
from cartcore.services.models import CartItem

if TYPE_CHECKING:
    from upstash_redis.asyncio import Redis as AsyncRedis

logger = get_logger(__name__)


class CartItemStore(ABC):
    """Keyed storage of cart item rows."""

    @abstractmethod
    async def get(self, cart_id: str, product_id: str) -> Optional[CartItem]:
        """Return the row, or None if absent."""

    @abstractmethod
    async def create(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        """Insert a row. Raises DuplicateItemError if the key exists."""

    @abstractmethod
    async def update(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        """Overwrite a row's quantity. Raises CartItemNotFoundError if absent."""

    @abstractmethod
    async def increment(self, cart_id: str, product_id: str, delta: int) -> CartItem:
        """
        Atomically add delta to a row's quantity.

        Raises CartItemNotFoundError if absent, InvalidQuantityError (row left
        unchanged) if the result would be negative.
        """

    @abstractmethod
    async def delete(self, cart_id: str, product_id: str) -> bool:
        """Delete a row. Returns False if there was nothing to delete."""

    @abstractmethod
    async def list_by_cart(self, cart_id: str) -> list[CartItem]:
        """All rows of one cart, unordered."""

    @abstractmethod
    async def delete_by_cart(self, cart_id: str) -> int:
        """Delete every row of a cart. Returns the number of rows removed."""

    @abstractmethod
    async def list_all(self) -> list[CartItem]:
        """Every row in the store, unordered."""


class InMemoryCartItemStore(CartItemStore):
    """Dict-backed store. Writes are serialized with an asyncio.Lock."""

    def __init__(self):
        self._rows: dict[tuple[str, str], int] = {}
        self._lock = asyncio.Lock()

    async def get(self, cart_id: str, product_id: str) -> Optional[CartItem]:
        quantity = self._rows.get((cart_id, product_id))
        if quantity is None:
            return None
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)

    async def create(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        async with self._lock:
            if (cart_id, product_id) in self._rows:
                raise DuplicateItemError(cart_id, product_id)
            self._rows[(cart_id, product_id)] = quantity
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)

    async def update(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        async with self._lock:
            if (cart_id, product_id) not in self._rows:
                raise CartItemNotFoundError(cart_id, product_id)
            self._rows[(cart_id, product_id)] = quantity
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)

    async def increment(self, cart_id: str, product_id: str, delta: int) -> CartItem:
        async with self._lock:
            current = self._rows.get((cart_id, product_id))
            if current is None:
                raise CartItemNotFoundError(cart_id, product_id)
            quantity = current + delta
            if quantity < 0:
                raise InvalidQuantityError(f"{ERROR_QUANTITY_NEGATIVE}: {current} {delta:+d}", quantity)
            self._rows[(cart_id, product_id)] = quantity
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)

    async def delete(self, cart_id: str, product_id: str) -> bool:
        async with self._lock:
            return self._rows.pop((cart_id, product_id), None) is not None

    async def list_by_cart(self, cart_id: str) -> list[CartItem]:
        return [
            CartItem(cart_id=c, product_id=p, quantity=q)
            for (c, p), q in list(self._rows.items())
            if c == cart_id
        ]

    async def delete_by_cart(self, cart_id: str) -> int:
        async with self._lock:
            keys = [key for key in self._rows if key[0] == cart_id]
            for key in keys:
                del self._rows[key]
        return len(keys)

    async def list_all(self) -> list[CartItem]:
        return [
            CartItem(cart_id=c, product_id=p, quantity=q)
            for (c, p), q in list(self._rows.items())
        ]


# KEYS[1] = cart hash, ARGV = product_id, delta, ttl
# Returns {status, quantity}: quantity is the new value on success, the
# unchanged current value when the result would be negative.
INCREMENT_SCRIPT = """
local current = redis.call('HGET', KEYS[1], ARGV[1])
if not current then
    return {0, 0}
end
current = tonumber(current)
local delta = tonumber(ARGV[2])
if current + delta < 0 then
    return {-1, current}
end
local updated = redis.call('HINCRBY', KEYS[1], ARGV[1], delta)
redis.call('EXPIRE', KEYS[1], tonumber(ARGV[3]))
return {1, updated}
"""

INCREMENT_MISSING = 0
INCREMENT_NEGATIVE = -1


class RedisCartItemStore(CartItemStore):
    """
    Upstash Redis store.

    Layout:
    - cart_items:{cart_id}  hash, field = product_id, value = quantity
    - cart_items:index      set of cart ids that have been written to

    Cart hashes expire after TTL.CART; every write refreshes the TTL.
    Quantity deltas go through INCREMENT_SCRIPT and are atomic per key.
    """

    def __init__(self, redis: "AsyncRedis", ttl: int = TTL.CART):
        self.redis = redis
        self.ttl = ttl

    @staticmethod
    def _to_items(cart_id: str, fields: Optional[dict]) -> list[CartItem]:
        if not fields:
            return []
        return [
            CartItem(cart_id=cart_id, product_id=product_id, quantity=int(quantity))
            for product_id, quantity in fields.items()
        ]

    async def _touch(self, cart_id: str) -> None:
        await self.redis.expire(RedisKeys.cart_key(cart_id), self.ttl)
        await self.redis.sadd(RedisKeys.CART_INDEX, cart_id)

    async def get(self, cart_id: str, product_id: str) -> Optional[CartItem]:
        quantity = await self.redis.hget(RedisKeys.cart_key(cart_id), product_id)
        if quantity is None:
            return None
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=int(quantity))

    async def create(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        created = await self.redis.hsetnx(RedisKeys.cart_key(cart_id), product_id, quantity)
        if not created:
            raise DuplicateItemError(cart_id, product_id)
        await self._touch(cart_id)
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)

    async def update(self, cart_id: str, product_id: str, quantity: int) -> CartItem:
        key = RedisKeys.cart_key(cart_id)
        if not await self.redis.hexists(key, product_id):
            raise CartItemNotFoundError(cart_id, product_id)
        await self.redis.hset(key, product_id, quantity)
        await self._touch(cart_id)
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)

    async def increment(self, cart_id: str, product_id: str, delta: int) -> CartItem:
        """Existence check, floor check and HINCRBY run as one Lua script."""
        status, quantity = await self.redis.eval(
            INCREMENT_SCRIPT,
            keys=[RedisKeys.cart_key(cart_id)],
            args=[product_id, delta, self.ttl],
        )
        status, quantity = int(status), int(quantity)
        if status == INCREMENT_MISSING:
            raise CartItemNotFoundError(cart_id, product_id)
        if status == INCREMENT_NEGATIVE:
            raise InvalidQuantityError(
                f"{ERROR_QUANTITY_NEGATIVE}: {quantity} {delta:+d}", quantity + delta
            )
        return CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)

    async def delete(self, cart_id: str, product_id: str) -> bool:
        removed = await self.redis.hdel(RedisKeys.cart_key(cart_id), product_id)
        return bool(removed)

    async def list_by_cart(self, cart_id: str) -> list[CartItem]:
        fields = await self.redis.hgetall(RedisKeys.cart_key(cart_id))
        return self._to_items(cart_id, fields)

    async def delete_by_cart(self, cart_id: str) -> int:
        key = RedisKeys.cart_key(cart_id)
        count = await self.redis.hlen(key)
        await self.redis.delete(key)
        await self.redis.srem(RedisKeys.CART_INDEX, cart_id)
        return int(count or 0)

    async def list_all(self) -> list[CartItem]:
        cart_ids = await self.redis.smembers(RedisKeys.CART_INDEX) or []
        items: list[CartItem] = []
        for cart_id in cart_ids:
            cart_items = await self.list_by_cart(cart_id)
            if not cart_items:
                # Hash expired or emptied by deletes
                await self.redis.srem(RedisKeys.CART_INDEX, cart_id)
                logger.debug(f"Pruned empty cart {sanitize_id_for_logging(cart_id)} from index")
                continue
            items.extend(cart_items)
        return items


__all__ = [
    "CartItemStore",
    "InMemoryCartItemStore",
    "RedisCartItemStore",
]
