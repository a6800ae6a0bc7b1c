"""
Rounding — Money rounding shared by the aggregation engine and report builder.

Every monetary value is rounded half-up to cents through `decimal`, so that
0.125 → 0.13 regardless of the binary representation of the float.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


_CENTS = Decimal("0.01")


class RoundingPolicy(str, Enum):
    """
    When intermediate money values are rounded.

        PER_STEP → item revenue, item profit and every running total
                   are rounded before the next addition
        FINAL    → raw floats are accumulated, rounding happens at output
    """

    PER_STEP = "per_step"
    FINAL = "final"


def round_money(value: float) -> float:
    """
    Round *value* to 2 decimals, half away from zero.

    Example:
        round_money(2.675)  → 2.68
        round_money(-0.005) → -0.01
    """
    if value != value or value in (float("inf"), float("-inf")):
        return value
    return float(Decimal(repr(float(value))).quantize(_CENTS, rounding=ROUND_HALF_UP))


def step(value: float, policy: RoundingPolicy) -> float:
    """Round *value* only if *policy* rounds intermediate results."""
    return round_money(value) if policy is RoundingPolicy.PER_STEP else value
