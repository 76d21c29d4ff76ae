"""Tests for days until stock-out, suggested stock and criticality."""

import pytest

from parts_analytics.models import NO_DEPLETION
from parts_analytics.stock_status import (
    classify_criticality,
    days_until_stockout,
    evaluate_stock,
    suggested_stock,
)


class TestDaysUntilStockout:

    def test_floor_of_daily_rate(self, config):
        assert days_until_stockout(5, 8.0, config) == 18
        assert days_until_stockout(25, 4.0, config) == 187

    def test_zero_consumption_never_depletes(self, config):
        assert days_until_stockout(10, 0.0, config) == NO_DEPLETION
        assert days_until_stockout(0, 0.0, config) == NO_DEPLETION

    def test_zero_stock_with_consumption(self, config):
        assert days_until_stockout(0, 3.0, config) == 0


class TestClassifyCriticality:

    @pytest.mark.parametrize("days,expected", [
        (0, "critical"),
        (7, "critical"),
        (8, "high"),
        (15, "high"),
        (16, "medium"),
        (30, "medium"),
        (31, "low"),
        (NO_DEPLETION, "low"),
    ])
    def test_tier_boundaries(self, config, days, expected):
        assert classify_criticality(days, config) == expected

    def test_custom_tiers(self, config):
        cfg = config.with_overrides(critical_days=3, high_days=10, medium_days=20)
        assert classify_criticality(5, cfg) == "high"
        assert classify_criticality(21, cfg) == "low"


class TestSuggestedStock:

    @pytest.mark.parametrize("trend,expected", [
        ("growing", 20), ("stable", 16), ("declining", 12),
    ])
    def test_months_by_trend(self, config, trend, expected):
        assert suggested_stock(8.0, trend, config) == expected

    def test_rounds_half_up(self, config):
        # 1.25 * 2.0 = 2.5
        assert suggested_stock(1.25, "stable", config) == 3

    def test_zero_consumption(self, config):
        assert suggested_stock(0.0, "growing", config) == 0


def test_evaluate_stock(config):
    position = evaluate_stock(5, 8.0, "growing", config)
    assert (position.days_until_stockout, position.suggested_stock, position.criticality) == (18, 20, "medium")
