"""
Revenue Strategies — Per-line-item revenue calculation.

Signature:  compute_revenue(item, product) -> float

Strategies:
    SimpleRevenue        → item price override or catalog price, minus discount (default)
    CatalogPriceRevenue  → catalog price only, minus discount
    CallableRevenue      → adapter for a plain function(item, product)

The engine treats every strategy the same way; it never assumes the default.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Protocol, runtime_checkable

from ..diagnostics import DiagnosticSink, LoggingSink, Severity
from ..models import LineItem, Product


@runtime_checkable
class RevenueStrategy(Protocol):
    def compute_revenue(self, item: LineItem, product: Optional[Product]) -> float:
        ...


def _valid_price(price: Optional[float]) -> bool:
    return price is not None and not math.isnan(price) and price >= 0


class SimpleRevenue:
    """
    Default revenue: price x quantity x (1 - discount/100).

    Price precedence:
        1. item.sale_price  (if numeric)
        2. product.sale_price

    Quantity is floored at 0 and discount clamped to [0, 100].
    A missing product or an invalid price (negative, NaN, absent) is
    recorded as an error diagnostic and yields 0. Never raises.
    """

    def __init__(self, sink: DiagnosticSink | None = None):
        self.sink = sink

    def with_sink(self, sink: DiagnosticSink) -> "SimpleRevenue":
        """Copy of this strategy reporting to *sink*."""
        return type(self)(sink=sink)

    def _error(self, message: str) -> float:
        sink = self.sink if self.sink is not None else LoggingSink()
        sink.record(message, Severity.ERROR)
        return 0.0

    def _price(self, item: LineItem, product: Product) -> Optional[float]:
        return item.sale_price if item.sale_price is not None else product.sale_price

    def compute_revenue(self, item: LineItem, product: Optional[Product]) -> float:
        if product is None:
            return self._error(f"Product not supplied for SKU {item.sku!r}; revenue is 0")

        price = self._price(item, product)
        if not _valid_price(price):
            return self._error(f"Invalid sale_price {price!r} for SKU {item.sku!r}; revenue is 0")

        quantity = max(0, item.quantity)
        discount = max(0, min(100, item.discount))
        return price * quantity * (1 - discount / 100)


class CatalogPriceRevenue(SimpleRevenue):
    """Like SimpleRevenue but ignores item-level price overrides."""

    def _price(self, item: LineItem, product: Product) -> Optional[float]:
        return product.sale_price


class CallableRevenue:
    """Wrap a plain `fn(item, product) -> number` as a RevenueStrategy."""

    def __init__(self, fn: Callable[[LineItem, Optional[Product]], float]):
        self.fn = fn

    def compute_revenue(self, item: LineItem, product: Optional[Product]) -> float:
        return self.fn(item, product)

    def __repr__(self) -> str:
        return f"CallableRevenue({getattr(self.fn, '__name__', self.fn)!r})"
