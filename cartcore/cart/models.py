"""Derived cart views with Decimal-based pricing. Never persisted."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from cartcore.services.models import CartItem, Product
from cartcore.services.money import ZERO, line_total, to_decimal


@dataclass
class CartLineDetails:
    """A cart item joined with its product. No discount, no total."""
    cart_id: str
    product_id: str
    quantity: int
    name: str
    description: Optional[str]
    price: Decimal
    stock: int
    image_url: Optional[str] = None

    @classmethod
    def join(cls, item: CartItem, product: Product) -> "CartLineDetails":
        return cls(
            cart_id=item.cart_id,
            product_id=item.product_id,
            quantity=item.quantity,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            image_url=product.image_url,
        )

    @property
    def in_stock(self) -> bool:
        return self.quantity <= self.stock

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "cart_id": self.cart_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "stock": self.stock,
            "image_url": self.image_url,
        }


@dataclass
class CartLine:
    """A priced cart line: quantity * price * (1 - discount_pct)."""
    cart_id: str
    product_id: str
    quantity: int
    name: str
    description: Optional[str]
    price: Decimal
    image_url: Optional[str] = None
    discount_pct: Decimal = ZERO

    def __post_init__(self):
        self.price = to_decimal(self.price)
        self.discount_pct = to_decimal(self.discount_pct)

    @classmethod
    def join(cls, item: CartItem, product: Product, discount_pct: Decimal = ZERO) -> "CartLine":
        return cls(
            cart_id=item.cart_id,
            product_id=item.product_id,
            quantity=item.quantity,
            name=product.name,
            description=product.description,
            price=product.price,
            image_url=product.image_url,
            discount_pct=discount_pct,
        )

    @property
    def total(self) -> Decimal:
        """Line total after discount, unrounded."""
        return line_total(self.quantity, self.price, self.discount_pct)

    def to_dict(self) -> dict:
        """Convert to dictionary (Decimals as strings)."""
        return {
            "cart_id": self.cart_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "image_url": self.image_url,
            "discount_pct": str(self.discount_pct),
            "total": str(self.total),
        }
