"""Tests for bonus strategies."""

import pytest

from sales_engine.processors.seller_performance.metrics.bonus import (
    BonusStrategy,
    CallableBonus,
    RankTieredBonus,
    classify_ranks,
)
from sales_engine.processors.seller_performance.models import SellerStat


def stat(profit):
    return SellerStat(seller_id="s", name="Test Seller", profit=profit)


# ---------------------------------------------------------------------------
# RankTieredBonus
# ---------------------------------------------------------------------------


class TestRankTieredBonus:
    @pytest.fixture
    def bonus(self):
        return RankTieredBonus()

    def test_is_bonus_strategy(self, bonus):
        assert isinstance(bonus, BonusStrategy)

    def test_sole_seller_gets_first_place_rate(self, bonus):
        """Rank 0 is also the last rank; first place wins."""
        assert bonus.compute_bonus(0, 1, stat(80)) == pytest.approx(12.0)

    def test_second_of_two_gets_podium_rate(self, bonus):
        """Rank 1 of 2 is also last; podium wins."""
        assert bonus.compute_bonus(1, 2, stat(100)) == pytest.approx(10.0)

    def test_third_of_three_gets_podium_rate(self, bonus):
        assert bonus.compute_bonus(2, 3, stat(100)) == pytest.approx(10.0)

    def test_last_of_four_gets_nothing(self, bonus):
        assert bonus.compute_bonus(3, 4, stat(100)) == 0

    def test_middle_ranks_get_standard_rate(self, bonus):
        assert bonus.compute_bonus(3, 5, stat(100)) == pytest.approx(5.0)
        assert bonus.compute_bonus(4, 5, stat(100)) == 0

    def test_negative_profit(self, bonus):
        assert bonus.compute_bonus(0, 3, stat(-50)) == pytest.approx(-7.5)

    def test_custom_rates(self):
        bonus = RankTieredBonus(first_rate=0.2, podium_rate=0.1, standard_rate=0.01)
        assert bonus.compute_bonus(0, 10, stat(100)) == pytest.approx(20.0)
        assert bonus.compute_bonus(5, 10, stat(100)) == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "rank,total,tier",
        [
            (0, 1, "first"),
            (1, 2, "podium"),
            (2, 3, "podium"),
            (3, 4, "last"),
            (3, 6, "standard"),
            (5, 6, "last"),
        ],
    )
    def test_tier(self, bonus, rank, total, tier):
        assert bonus.tier(rank, total) == tier


class TestClassifyRanks:
    def test_matches_tier_precedence(self):
        bonus = RankTieredBonus()
        for total in range(1, 8):
            labels = list(classify_ranks(total))
            assert labels == [bonus.tier(r, total) for r in range(total)]

    def test_five_sellers(self):
        assert list(classify_ranks(5)) == ["first", "podium", "podium", "standard", "last"]

    def test_empty(self):
        assert len(classify_ranks(0)) == 0


class TestCallableBonus:
    def test_delegates(self):
        strategy = CallableBonus(lambda rank, total, s: s.profit / total)
        assert strategy.compute_bonus(0, 4, stat(100)) == 25
