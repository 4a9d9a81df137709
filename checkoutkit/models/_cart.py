"""
Cart — products and the immutable snapshot taken when checkout starts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Dimensions:
    """Per-unit bounding box (inches)."""

    width: float
    height: float
    depth: float

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    def exceeds(self, max_height: float, max_width: float, max_depth: float) -> bool:
        return self.height > max_height or self.width > max_width or self.depth > max_depth


@dataclass(frozen=True, slots=True)
class ProductInfo:
    """What the product lookup knows about a product."""

    product_id: str
    name: str
    price: float
    weight: float  # lbs per unit
    dimensions: Dimensions
    category: str
    image_url: str | None = None


def _frozen_options(options: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(options))


@dataclass(frozen=True, slots=True)
class CartLine:
    product_id: str
    quantity: int
    unit_price: float
    options: Mapping[str, str] = field(default_factory=dict[str, str])

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"Cart line {self.product_id}: quantity must be >= 1, got {self.quantity}")
        if self.unit_price < 0:
            raise ValueError(f"Cart line {self.product_id}: unit price must be >= 0, got {self.unit_price}")
        object.__setattr__(self, "options", _frozen_options(self.options))

    @property
    def total_price(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True, slots=True)
class CartSnapshot:
    """
    Cart contents frozen at checkout start.

    Never mutated during checkout; take a fresh snapshot if the cart
    changes.
    """

    lines: tuple[CartLine, ...] = ()

    @classmethod
    def of(cls, *lines: CartLine) -> CartSnapshot:
        return cls(tuple(lines))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> float:
        return sum((line.total_price for line in self.lines), 0.0)

    @property
    def product_ids(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(line.product_id for line in self.lines))


__all__ = ("Dimensions", "ProductInfo", "CartLine", "CartSnapshot")
