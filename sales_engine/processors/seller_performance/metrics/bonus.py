"""
Bonus Strategies — Rank-based reward as a share of profit.

Signature:  compute_bonus(rank, total, stat) -> float
            rank is the 0-based position in the profit-descending order.

Default tier policy (first match wins):
    rank == 0          → 15% of profit
    rank in (1, 2)     → 10% of profit
    rank == total - 1  → 0
    otherwise          → 5% of profit

Precedence matters for small teams: a sole seller is both first and last
and gets 15%; with two sellers, second place is also last and gets 10%.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

import numpy as np

from ....config import settings
from ..models import SellerStat


# Tier labels, in precedence order
BONUS_TIERS = ["first", "podium", "last", "standard"]


@runtime_checkable
class BonusStrategy(Protocol):
    def compute_bonus(self, rank: int, total: int, stat: SellerStat) -> float:
        ...


def classify_ranks(total: int) -> np.ndarray:
    """
    Label every rank 0..total-1 with its bonus tier.

    Example:
        classify_ranks(1) → ['first']
        classify_ranks(2) → ['first', 'podium']
        classify_ranks(5) → ['first', 'podium', 'podium', 'standard', 'last']
    """
    ranks = np.arange(total)
    conditions = [
        ranks == 0,
        (ranks == 1) | (ranks == 2),
        ranks == total - 1,
    ]
    return np.select(conditions, BONUS_TIERS[:3], default="standard")


class RankTieredBonus:
    """Default tiered bonus. Rates default to the engine settings."""

    def __init__(
        self,
        first_rate: float | None = None,
        podium_rate: float | None = None,
        standard_rate: float | None = None,
    ):
        self.rates = {
            "first": settings.FIRST_PLACE_RATE if first_rate is None else first_rate,
            "podium": settings.PODIUM_RATE if podium_rate is None else podium_rate,
            "last": 0.0,
            "standard": settings.STANDARD_RATE if standard_rate is None else standard_rate,
        }

    def tier(self, rank: int, total: int) -> str:
        if rank == 0:
            return "first"
        if rank in (1, 2):
            return "podium"
        if rank == total - 1:
            return "last"
        return "standard"

    def compute_bonus(self, rank: int, total: int, stat: SellerStat) -> float:
        rate = self.rates[self.tier(rank, total)]
        return stat.profit * rate if rate else 0.0


class CallableBonus:
    """Wrap a plain `fn(rank, total, stat) -> number` as a BonusStrategy."""

    def __init__(self, fn: Callable[[int, int, SellerStat], float]):
        self.fn = fn

    def compute_bonus(self, rank: int, total: int, stat: SellerStat) -> float:
        return self.fn(rank, total, stat)

    def __repr__(self) -> str:
        return f"CallableBonus({getattr(self.fn, '__name__', self.fn)!r})"
