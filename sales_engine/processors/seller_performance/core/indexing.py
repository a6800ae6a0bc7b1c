"""
Indexing — O(1) lookup tables built once per analysis run.

    seller id → SellerStat   (zeroed accumulators, input order preserved)
    SKU       → Product
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from ..models import Product, Seller, SellerStat


class SalesIndex:
    """
    Read-only lookups over the sellers and catalog of one dataset.

    Unknown keys return None instead of raising.
    """

    def __init__(self, sellers: Iterable[Seller], products: Iterable[Product]):
        self._stats: dict[str, SellerStat] = {
            s.id: SellerStat.from_seller(s) for s in sellers
        }
        self._products: dict[str, Product] = {p.sku: p for p in products}

    def seller(self, seller_id: Optional[str]) -> Optional[SellerStat]:
        return self._stats.get(seller_id)

    def product(self, sku: Optional[str]) -> Optional[Product]:
        return self._products.get(sku)

    @property
    def stats(self) -> list[SellerStat]:
        """Seller stats in input order."""
        return list(self._stats.values())

    @property
    def product_count(self) -> int:
        return len(self._products)
