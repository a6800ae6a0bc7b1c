"""
Seller Performance — Revenue, profit, top products and bonuses per seller.

Usage:
    from sales_engine.processors.seller_performance import analyze_sales_data
    report = analyze_sales_data(data, {"calculateBonus": my_bonus})
"""

from .analyzer import SalesAnalyzer, analyze_sales_data, report_to_frame
from .core.rounding import RoundingPolicy
from .core.validation import AnalysisOptions, SalesDataValidationError
from .diagnostics import CollectingSink, DiagnosticSink, LoggingSink, Severity
from .metrics.bonus import BonusStrategy, RankTieredBonus
from .metrics.revenue import CatalogPriceRevenue, RevenueStrategy, SimpleRevenue

__all__ = [
    "SalesAnalyzer",
    "analyze_sales_data",
    "report_to_frame",
    "RoundingPolicy",
    "AnalysisOptions",
    "SalesDataValidationError",
    "CollectingSink",
    "DiagnosticSink",
    "LoggingSink",
    "Severity",
    "BonusStrategy",
    "RankTieredBonus",
    "CatalogPriceRevenue",
    "RevenueStrategy",
    "SimpleRevenue",
]
