"""
Metrics — Pluggable calculation strategies and report derivations.

Modules:
    revenue  — Per-line-item revenue strategies
    bonus    — Rank-tiered bonus strategies
    products — Top sold products per seller
    summary  — Team totals and bonus-tier distribution
"""
