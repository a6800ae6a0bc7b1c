"""
Sales Analyzer — The single entry point for seller performance reports.

Pipeline:
    validate → index → aggregate (revenue strategy per item)
             → rank by profit → bonus strategy per rank → report

Nothing is cached between calls; every call recomputes from its input.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from .aggregator import AggregationEngine, RunCounters
from .core.indexing import SalesIndex
from .core.rounding import round_money
from .core.validation import AnalysisOptions, SalesDataset, validate_input
from .diagnostics import CollectingSink, DiagnosticSink, LoggingSink, Severity
from .metrics.products import top_products
from .metrics.revenue import SimpleRevenue
from .metrics.summary import calculate_team_summary
from .models import SellerReport, SellerStat, TopProduct, is_real_number


logger = logging.getLogger(__name__)


class SalesAnalyzer:
    """
    Turns a sales dataset into a ranked per-seller report.

    Usage:
        analyzer = SalesAnalyzer()
        report = analyzer.analyze(data)
        snapshot = analyzer.snapshot(data, {"profitMargin": 0.3})
    """

    def __init__(self, sink: DiagnosticSink | None = None):
        self.sink = sink if sink is not None else LoggingSink()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze(self, data: Any, options: Any = None) -> list[dict]:
        """
        Validate, aggregate and rank *data*.

        Args:
            data:    {"purchase_records": [...], "products": [...], "sellers": [...]}
            options: Optional {"profitMargin", "calculateRevenue", "calculateBonus",
                     "rounding", "top_n"} mapping or AnalysisOptions.

        Returns:
            [
              {
                "seller_id": "seller_1",
                "name": "Alexey Petrov",
                "revenue": 1200.5,
                "profit": 430.1,
                "sales_count": 12,
                "top_products": [{"sku": "SKU_001", "quantity": 8}, ...],
                "bonus": 64.52
              },
              ...
            ]   # ordered by profit, highest first

        Raises:
            SalesDataValidationError: on malformed data or options.
        """
        dataset, opts = validate_input(data, options)
        reports, _ = self._run(dataset, opts, self.sink)
        return [r.model_dump() for r in reports]

    def snapshot(self, data: Any, options: Any = None) -> dict:
        """
        Run the analysis and wrap the report with team-level totals.

        Returns:
            {
              "meta":        {"total_sellers": 5, "receipts_skipped": 1, ...},
              "sellers":     [ ...same entries as analyze()... ],
              "totals":      {"revenue": ..., "profit": ..., "bonus_pool": ..., "sales_count": ...},
              "bonus_tiers": {"first": 1, "podium": 2, "standard": 1, "last": 1},
              "diagnostics": {"info": 0, "warning": 1, "error": 0}
            }
        """
        dataset, opts = validate_input(data, options)
        collector = CollectingSink(forward_to=self.sink)
        reports, counters = self._run(dataset, opts, collector)
        rows = [r.model_dump() for r in reports]

        summary = calculate_team_summary(report_to_frame(rows))
        return {
            "meta": {
                "total_sellers": len(dataset.sellers),
                "total_products": len(dataset.products),
                "total_receipts": len(dataset.purchase_records),
                "receipts_skipped": counters.receipts_skipped,
                "items_processed": counters.items_processed,
                "items_skipped": counters.items_skipped,
                "profit_margin": opts.profit_margin,
                "rounding": opts.rounding.value,
                "top_n": opts.top_n,
            },
            "sellers": rows,
            "totals": summary["totals"],
            "bonus_tiers": summary["bonus_tiers"],
            "diagnostics": collector.counts(),
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(
        self,
        dataset: SalesDataset,
        opts: AnalysisOptions,
        sink: DiagnosticSink,
    ) -> tuple[list[SellerReport], RunCounters]:
        revenue_strategy = opts.revenue_strategy
        if isinstance(revenue_strategy, SimpleRevenue) and revenue_strategy.sink is None:
            revenue_strategy = revenue_strategy.with_sink(sink)

        index = SalesIndex(dataset.sellers, dataset.products)
        engine = AggregationEngine(index, revenue_strategy, sink, rounding=opts.rounding)
        stats = engine.run(dataset.purchase_records)

        ranked = rank_sellers(stats)
        total = len(ranked)
        logger.debug("Ranking %d sellers by profit", total)
        for rank, stat in enumerate(ranked):
            stat.bonus = self._bonus(opts, rank, total, stat, sink)
            stat.top_products = top_products(stat.products_sold, opts.top_n)

        return [build_report(stat) for stat in ranked], engine.counters

    @staticmethod
    def _bonus(
        opts: AnalysisOptions,
        rank: int,
        total: int,
        stat: SellerStat,
        sink: DiagnosticSink,
    ) -> float:
        bonus = opts.bonus_strategy.compute_bonus(rank, total, stat)
        if not is_real_number(bonus):
            sink.record(
                f"Bonus strategy returned {bonus!r} for seller {stat.seller_id!r}; using 0",
                Severity.ERROR,
            )
            return 0.0
        return round_money(bonus)


# ------------------------------------------------------------------
# Ranking & report helpers
# ------------------------------------------------------------------

def rank_sellers(stats: list[SellerStat]) -> list[SellerStat]:
    """Sort by profit, highest first. Ties keep input order."""
    return sorted(stats, key=lambda s: s.profit, reverse=True)


def build_report(stat: SellerStat) -> SellerReport:
    return SellerReport(
        seller_id=stat.seller_id,
        name=stat.name,
        revenue=round_money(stat.revenue),
        profit=round_money(stat.profit),
        sales_count=stat.sales_count,
        top_products=[TopProduct(**p) for p in stat.top_products],
        bonus=round_money(stat.bonus),
    )


def report_to_frame(report: list[dict]) -> pd.DataFrame:
    """
    One row per seller in rank order, with a 0-based `rank` column.

    `top_products` is flattened to "SKU:qty; SKU:qty" for tabular export.
    """
    columns = [
        "rank", "seller_id", "name", "revenue", "profit",
        "sales_count", "bonus", "top_products",
    ]
    if not report:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(report)
    df.insert(0, "rank", range(len(df)))
    df["top_products"] = df["top_products"].apply(
        lambda items: "; ".join(f"{p['sku']}:{p['quantity']}" for p in items)
    )
    return df[columns]


def analyze_sales_data(
    data: Any,
    options: Any = None,
    sink: DiagnosticSink | None = None,
) -> list[dict]:
    """Functional shortcut for `SalesAnalyzer(sink).analyze(data, options)`."""
    return SalesAnalyzer(sink).analyze(data, options)
