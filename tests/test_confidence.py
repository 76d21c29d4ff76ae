"""Tests for prediction confidence and alert generation."""

import pytest

from parts_analytics.confidence import generate_alerts, score_confidence
from parts_analytics.models import NO_DEPLETION, Part

BELOW_MIN = "stock below minimum"
CRITICAL = "critical: depletes in under 7 days"
LOW = "low: depletes in under 15 days"
IDLE = "no recent consumption — review need for stock"
OVERSTOCK = "possible overstock — consider reducing orders"


@pytest.mark.parametrize("samples,expected", [
    (0, 40), (2, 40), (3, 60), (5, 60), (6, 75), (11, 75), (12, 90), (500, 90),
])
def test_confidence_tiers(config, samples, expected):
    assert score_confidence(samples, config) == expected


def test_custom_confidence_tiers(config):
    cfg = config.with_overrides(confidence_tiers={24: 95, 1: 50}, confidence_floor=10)
    assert score_confidence(0, cfg) == 10
    assert score_confidence(1, cfg) == 50
    assert score_confidence(24, cfg) == 95


def _part(stock, minimum):
    return Part(id=1, code="X", description="X", current_stock=stock, minimum_stock=minimum)


class TestGenerateAlerts:

    def test_below_minimum_only(self, config):
        assert generate_alerts(_part(5, 10), 8.0, 18, config) == [BELOW_MIN]

    def test_stock_equal_to_minimum_alerts(self, config):
        assert BELOW_MIN in generate_alerts(_part(10, 10), 8.0, 37, config)

    def test_critical_and_low_are_exclusive(self, config):
        critical = generate_alerts(_part(1, 0), 30.0, 1, config)
        low = generate_alerts(_part(10, 0), 30.0, 10, config)

        assert critical == [CRITICAL]
        assert low == [LOW]

    def test_boundaries(self, config):
        assert CRITICAL in generate_alerts(_part(7, 0), 30.0, 7, config)
        assert LOW in generate_alerts(_part(8, 0), 30.0, 8, config)
        assert LOW in generate_alerts(_part(15, 0), 30.0, 15, config)
        assert generate_alerts(_part(16, 0), 30.0, 16, config) == []

    def test_idle_stock(self, config):
        alerts = generate_alerts(_part(3, 5), 0.0, NO_DEPLETION, config)
        assert alerts == [BELOW_MIN, IDLE, OVERSTOCK]

    def test_overstock(self, config):
        assert generate_alerts(_part(25, 15), 4.0, 187, config) == [OVERSTOCK]
        # exactly six months of stock is not overstock
        assert generate_alerts(_part(24, 15), 4.0, 180, config) == []

    def test_empty_part_without_history(self, config):
        assert generate_alerts(_part(0, 0), 0.0, NO_DEPLETION, config) == [BELOW_MIN]

    def test_fixed_order(self, config):
        alerts = generate_alerts(_part(2, 5), 30.0, 2, config)
        assert alerts == [BELOW_MIN, CRITICAL]
