"""
Catalog — product lookup collaborator.

CheckoutFlow only needs ``resolve``; ``InMemoryCatalog`` is the seeded demo
implementation.
"""

from dataclasses import dataclass, field
from typing import Protocol
import asyncio

import structlog

from checkoutkit.models import Dimensions, ProductInfo

logger = structlog.get_logger(__name__)


class ProductLookup(Protocol):
    async def resolve(self, product_id: str) -> ProductInfo | None: ...


@dataclass
class InMemoryCatalog:
    _products: dict[str, ProductInfo] = field(default_factory=dict[str, ProductInfo])
    latency: float = 0.0

    def seed(self) -> None:
        self._products = {
            p.product_id: p
            for p in (
                ProductInfo("LAPTOP", "MacBook Pro", 1999.00, 4.5, Dimensions(14, 1, 10), "electronics",
                            "https://cdn.example.com/laptop.jpg"),
                ProductInfo("PHONE", "iPhone 15", 999.00, 0.4, Dimensions(3, 6, 0.5), "electronics",
                            "https://cdn.example.com/phone.jpg"),
                ProductInfo("CABLE", "USB-C Cable", 19.99, 0.1, Dimensions(4, 4, 1), "accessories"),
                ProductInfo("CASE", "Phone Case", 29.99, 0.2, Dimensions(4, 7, 1), "accessories"),
                ProductInfo("DESK", "Standing Desk", 449.00, 60.0, Dimensions(24, 40, 24), "furniture"),
                ProductInfo("DUMBBELLS", "Dumbbell Set", 89.00, 40.0, Dimensions(16, 8, 8), "fitness"),
                ProductInfo("LIGHTER_FLUID", "Lighter Fluid", 6.49, 0.5, Dimensions(2, 6, 2), "hazardous"),
            )
        }

    def add(self, product: ProductInfo) -> None:
        self._products[product.product_id] = product

    async def resolve(self, product_id: str) -> ProductInfo | None:
        if self.latency:
            await asyncio.sleep(self.latency)
        product = self._products.get(product_id)
        if product is None:
            logger.warning("product_not_found", product_id=product_id)
        return product

    def list_all(self) -> list[ProductInfo]:
        return list(self._products.values())


__all__ = ("ProductLookup", "InMemoryCatalog")
