"""Collaborator Models - Pydantic models for stored and catalog records."""
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, field_validator

from cartcore.services.money import parse_decimal


def _id_to_str(v):
    # Catalog tables may use integer primary keys
    return str(v) if isinstance(v, int) and not isinstance(v, bool) else v


class CartItem(BaseModel):
    """Stored cart item row, keyed by (cart_id, product_id)."""
    cart_id: str
    product_id: str
    quantity: int

    class Config:
        extra = "ignore"

    @field_validator("cart_id", "product_id", mode="before")
    @classmethod
    def convert_id(cls, v):
        return _id_to_str(v)

    @property
    def key(self) -> tuple[str, str]:
        return (self.cart_id, self.product_id)


class Product(BaseModel):
    """Product catalog record."""
    product_id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int = 0
    image_url: Optional[str] = None

    class Config:
        extra = "ignore"  # Ignore unknown fields from DB

    @field_validator("product_id", mode="before")
    @classmethod
    def convert_id(cls, v):
        return _id_to_str(v)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return v if v is None else parse_decimal(v)

    @field_validator("price")
    @classmethod
    def check_price(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("price must be non-negative")
        return v

    @field_validator("stock")
    @classmethod
    def check_stock(cls, v: int) -> int:
        if v < 0:
            raise ValueError("stock must be non-negative")
        return v


class Coupon(BaseModel):
    """Coupon record. discount_pct is a fraction: 0.1 == 10% off."""
    coupon_id: str
    discount_pct: Decimal

    class Config:
        extra = "ignore"

    @field_validator("coupon_id", mode="before")
    @classmethod
    def convert_id(cls, v):
        return _id_to_str(v)

    @field_validator("discount_pct", mode="before")
    @classmethod
    def convert_discount_to_decimal(cls, v):
        return v if v is None else parse_decimal(v)

    @field_validator("discount_pct")
    @classmethod
    def check_discount_range(cls, v: Decimal) -> Decimal:
        if v < 0 or v > 1:
            raise ValueError("discount_pct must be between 0 and 1")
        return v
