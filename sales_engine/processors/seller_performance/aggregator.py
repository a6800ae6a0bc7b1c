"""
Aggregation Engine — Walks receipts and accumulates per-seller totals.

For each receipt:
    - unknown seller id → diagnostic, whole receipt skipped
    - otherwise sales_count += 1, then for each line item:
        - unknown SKU     → diagnostic, only that item skipped
        - revenue         = revenue strategy (item, product)
        - cost            = product.purchase_price * quantity
        - profit          = revenue - cost
        - revenue, profit and products_sold[sku] accumulate on the seller

Under RoundingPolicy.PER_STEP every intermediate money value is rounded
to cents before the next addition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...config import settings
from .core.indexing import SalesIndex
from .core.rounding import RoundingPolicy, round_money, step
from .diagnostics import DiagnosticSink, Severity
from .metrics.revenue import RevenueStrategy
from .models import LineItem, PurchaseRecord, SellerStat, is_real_number


logger = logging.getLogger(__name__)


@dataclass
class RunCounters:
    receipts_processed: int = 0
    receipts_skipped: int = 0
    items_processed: int = 0
    items_skipped: int = 0


class AggregationEngine:
    """
    Accumulate SellerStat totals for one dataset.

    Usage:
        engine = AggregationEngine(index, SimpleRevenue(), sink)
        stats = engine.run(dataset.purchase_records)
    """

    def __init__(
        self,
        index: SalesIndex,
        revenue_strategy: RevenueStrategy,
        sink: DiagnosticSink,
        rounding: RoundingPolicy = RoundingPolicy.PER_STEP,
        total_tolerance: float | None = None,
    ):
        self.index = index
        self.revenue_strategy = revenue_strategy
        self.sink = sink
        self.rounding = rounding
        self.total_tolerance = (
            settings.TOTAL_AMOUNT_TOLERANCE if total_tolerance is None else total_tolerance
        )
        self.counters = RunCounters()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, records: list[PurchaseRecord]) -> list[SellerStat]:
        """Process every receipt and return the seller stats in input order."""
        for record in records:
            self.process_receipt(record)

        logger.debug(
            "Aggregated %d receipts (%d skipped), %d items (%d skipped)",
            self.counters.receipts_processed,
            self.counters.receipts_skipped,
            self.counters.items_processed,
            self.counters.items_skipped,
        )
        return self.index.stats

    def process_receipt(self, record: PurchaseRecord) -> None:
        stat = self.index.seller(record.seller_id)
        if stat is None:
            self.counters.receipts_skipped += 1
            self.sink.record(
                f"Seller {record.seller_id!r} not found; receipt skipped",
                Severity.WARNING,
            )
            return

        self.counters.receipts_processed += 1
        stat.sales_count += 1

        receipt_revenue = 0.0
        for item in record.items:
            item_revenue = self._process_item(stat, item)
            if item_revenue is not None:
                receipt_revenue += item_revenue

        self._check_total(record, receipt_revenue)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _process_item(self, stat: SellerStat, item: LineItem) -> float | None:
        product = self.index.product(item.sku)
        if product is None:
            self.counters.items_skipped += 1
            self.sink.record(
                f"SKU {item.sku!r} not found in catalog; line item skipped",
                Severity.WARNING,
            )
            return None

        self.counters.items_processed += 1

        revenue = self.revenue_strategy.compute_revenue(item, product)
        if not is_real_number(revenue):
            self.sink.record(
                f"Revenue strategy returned {revenue!r} for SKU {item.sku!r}; using 0",
                Severity.ERROR,
            )
            revenue = 0.0

        revenue = step(revenue, self.rounding)
        cost = product.purchase_price * item.quantity
        profit = step(revenue - cost, self.rounding)

        stat.revenue = step(stat.revenue + revenue, self.rounding)
        stat.profit = step(stat.profit + profit, self.rounding)
        stat.add_quantity(item.sku, item.quantity)
        return revenue

    def _check_total(self, record: PurchaseRecord, computed: float) -> None:
        if record.total_amount is None:
            return
        if abs(round_money(computed) - record.total_amount) > self.total_tolerance:
            self.sink.record(
                f"Receipt for seller {record.seller_id!r}: total_amount "
                f"{record.total_amount} differs from computed revenue {round_money(computed)}",
                Severity.INFO,
            )
