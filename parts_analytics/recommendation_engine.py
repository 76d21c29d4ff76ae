"""
Recommendation Engine Module
Turns part analytics into a prioritized purchase list.

Formula:
    Suggested Qty = max(Suggested Stock - Current Stock, 60-day Forecast, 0)

A part is recommended when it sits below its suggested stock or its
criticality is anything but low.
"""

import logging
from typing import Dict, List, Sequence

from .config import AnalyticsConfig, default_config
from .models import (
    CRITICALITY_CRITICAL,
    CRITICALITY_HIGH,
    CRITICALITY_LOW,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PartAnalytics,
    Recommendation,
)

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Generate purchase recommendations from computed analytics."""

    def __init__(self, config: AnalyticsConfig = None):
        self.config = config or default_config

    def needs_purchase(self, analytics: PartAnalytics) -> bool:
        return (
            analytics.current_stock < analytics.suggested_stock
            or analytics.criticality != CRITICALITY_LOW
        )

    def suggested_quantity(self, analytics: PartAnalytics) -> int:
        gap = analytics.suggested_stock - analytics.current_stock
        return max(gap, analytics.forecast_60, 0)

    def _classify_priority(self, criticality: str) -> str:
        """Map criticality to purchase priority."""
        if criticality == CRITICALITY_CRITICAL:
            return PRIORITY_HIGH
        elif criticality == CRITICALITY_HIGH:
            return PRIORITY_MEDIUM
        else:
            return PRIORITY_LOW

    def _explain(self, analytics: PartAnalytics) -> str:
        if analytics.days_until_stockout <= self.config.high_days:
            return f"stock crítico: {analytics.days_until_stockout} días restantes"
        return f"optimización basada en tendencia {analytics.trend}"

    def recommend(self, analytics: PartAnalytics) -> Recommendation:
        """Build the recommendation for a single part (no inclusion check)."""
        return Recommendation(
            analytics=analytics,
            suggested_quantity=self.suggested_quantity(analytics),
            priority=self._classify_priority(analytics.criticality),
            reason=self._explain(analytics),
        )

    def generate_recommendations(self, analytics: Sequence[PartAnalytics]) -> List[Recommendation]:
        """
        Build the sorted recommendation list.

        Sorted by priority (alta, media, baja). Parts with the same priority
        keep their input order.
        """
        recommendations = [
            self.recommend(item) for item in analytics if self.needs_purchase(item)
        ]
        recommendations.sort(key=lambda r: -self.config.get_priority_rank(r.priority))

        logger.info(
            "Generated %d recommendations from %d parts",
            len(recommendations), len(analytics)
        )
        return recommendations

    def group_by_priority(self, recommendations: Sequence[Recommendation]) -> Dict[str, Dict]:
        """Group recommendations by priority level."""
        groups = {PRIORITY_HIGH: [], PRIORITY_MEDIUM: [], PRIORITY_LOW: []}
        for rec in recommendations:
            groups.setdefault(rec.priority, []).append(rec)
        return {
            k: {
                "count": len(v),
                "total_units": sum(r.suggested_quantity for r in v),
            }
            for k, v in groups.items()
        }
