"""Tests for purchase recommendations."""

from parts_analytics.analytics_engine import AnalyticsEngine
from parts_analytics.models import PartAnalytics
from parts_analytics.recommendation_engine import RecommendationEngine


def _analytics(code, stock, days, criticality, suggested=20, forecast_30=9, trend="growing"):
    return PartAnalytics(
        part_id=code, code=code, description=code, current_stock=stock, minimum_stock=0,
        avg_monthly_consumption=8.0, trend=trend, days_until_stockout=days,
        suggested_stock=suggested, criticality=criticality, forecast_30=forecast_30,
        forecast_60=forecast_30 * 2, forecast_90=forecast_30 * 3, has_seasonal_pattern=False,
    )


class TestRecommendationEngine:

    def test_quantity_is_largest_of_gap_and_forecast(self, config):
        engine = RecommendationEngine(config)

        assert engine.suggested_quantity(_analytics("A", 5, 18, "medium", suggested=20, forecast_30=9)) == 18
        assert engine.suggested_quantity(_analytics("B", 0, 0, "critical", suggested=60, forecast_30=9)) == 60
        assert engine.suggested_quantity(_analytics("C", 50, 300, "low", suggested=20, forecast_30=0)) == 0

    def test_inclusion(self, config):
        engine = RecommendationEngine(config)

        assert engine.needs_purchase(_analytics("A", 5, 18, "medium"))
        assert engine.needs_purchase(_analytics("B", 30, 20, "medium", suggested=20))
        assert not engine.needs_purchase(_analytics("C", 30, 100, "low", suggested=20))

    def test_priority_order_and_stable_ties(self, config):
        engine = RecommendationEngine(config)
        analytics = [
            _analytics("LOW1", 5, 40, "low"),
            _analytics("HIGH1", 5, 12, "high"),
            _analytics("CRIT1", 0, 0, "critical"),
            _analytics("MED1", 5, 25, "medium"),
            _analytics("CRIT2", 1, 3, "critical"),
        ]
        recs = engine.generate_recommendations(analytics)

        assert [r.analytics.code for r in recs] == ["CRIT1", "CRIT2", "HIGH1", "LOW1", "MED1"]
        assert [r.priority for r in recs] == ["alta", "alta", "media", "baja", "baja"]

    def test_reasons(self, config):
        engine = RecommendationEngine(config)

        assert engine.recommend(_analytics("A", 1, 15, "high")).reason == "stock crítico: 15 días restantes"
        assert engine.recommend(_analytics("B", 5, 16, "medium", trend="declining")).reason == (
            "optimización basada en tendencia declining"
        )

    def test_group_by_priority(self, config):
        engine = RecommendationEngine(config)
        recs = engine.generate_recommendations([
            _analytics("A", 0, 0, "critical", suggested=10, forecast_30=2),
            _analytics("B", 0, 1, "critical", suggested=10, forecast_30=2),
        ])
        groups = engine.group_by_priority(recs)

        assert groups["alta"] == {"count": 2, "total_units": 20}
        assert groups["baja"] == {"count": 0, "total_units": 0}

    def test_to_dict(self, config):
        rec = RecommendationEngine(config).recommend(_analytics("A", 5, 18, "medium"))
        data = rec.to_dict()

        assert data["priority"] == "baja"
        assert data["suggested_quantity"] == 18
        assert data["part"]["code"] == "A"


def test_end_to_end_ordering(config, tiered_parts):
    parts, history = tiered_parts
    recs = AnalyticsEngine(config=config).get_purchase_recommendations(parts, history)

    assert [r.analytics.code for r in recs] == ["CRIT001", "HIGH001"]
    assert [r.priority for r in recs] == ["alta", "media"]
    assert [r.suggested_quantity for r in recs] == [60, 60]
    assert recs[0].reason == "stock crítico: 1 días restantes"
    assert recs[1].reason == "stock crítico: 10 días restantes"
