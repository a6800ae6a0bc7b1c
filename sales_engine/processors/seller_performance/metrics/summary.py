"""
Team Summary — Totals and bonus-tier distribution over a ranked report.
"""

from __future__ import annotations

import pandas as pd

from ..core.rounding import round_money
from .bonus import BONUS_TIERS, classify_ranks


def calculate_team_summary(df: pd.DataFrame) -> dict:
    """
    Aggregate a report frame (output of report_to_frame).

    Returns:
        {
          "totals": {
            "revenue": 15320.4,
            "profit": 4210.75,
            "bonus_pool": 402.1,
            "sales_count": 87
          },
          "bonus_tiers": {"first": 1, "podium": 2, "last": 1, "standard": 6}
        }
    """
    if df.empty:
        return {
            "totals": {"revenue": 0.0, "profit": 0.0, "bonus_pool": 0.0, "sales_count": 0},
            "bonus_tiers": {tier: 0 for tier in BONUS_TIERS},
        }

    totals = {
        "revenue": round_money(float(df["revenue"].sum())),
        "profit": round_money(float(df["profit"].sum())),
        "bonus_pool": round_money(float(df["bonus"].sum())),
        "sales_count": int(df["sales_count"].sum()),
    }

    labels = pd.Series(classify_ranks(len(df))).value_counts()
    tiers = {tier: int(labels.get(tier, 0)) for tier in BONUS_TIERS}

    return {"totals": totals, "bonus_tiers": tiers}
