"""
Analytics Engine Module
Runs the per-part pipeline and answers the three analytics queries:

- get_all_analytics: analytics for every part, in input order
- get_critical_items: parts at risk, soonest stock-out first
- get_purchase_recommendations: prioritized purchase list

Every query is a pure function of its inputs. Nothing is cached here;
callers that want a refresh interval cache the results themselves.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .config import AnalyticsConfig, default_config
from .confidence import generate_alerts, score_confidence
from .forecaster import forecast_demand
from .history import average_monthly_consumption, bucket_usage
from .models import (
    CRITICALITY_CRITICAL,
    CRITICALITY_HIGH,
    Part,
    PartAnalytics,
    Recommendation,
    UsageEvent,
)
from .providers import HistoryProvider, group_by_part
from .recommendation_engine import RecommendationEngine
from .seasonality import detect_seasonality
from .stock_status import evaluate_stock
from .trend import classify_trend
from .validation import validate_inputs

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """Compute predictive inventory analytics for spare parts."""

    def __init__(
        self,
        config: AnalyticsConfig = None,
        history_provider: Optional[HistoryProvider] = None
    ):
        self.config = config or default_config
        self.history_provider = history_provider
        self.recommendation_engine = RecommendationEngine(config=self.config)

    # =========================================================================
    # PER-PART PIPELINE
    # =========================================================================

    def analyze_part(self, part: Part, events: Sequence[UsageEvent]) -> PartAnalytics:
        """
        Run bucketing, trend, seasonality, forecast, stock status and
        confidence for one part. Inputs must already be validated.
        """
        config = self.config

        buckets = bucket_usage(events, fold_years=config.fold_years)
        trend = classify_trend(buckets, config)
        avg_consumption = average_monthly_consumption(events)
        seasonality = detect_seasonality(events, config)
        forecast = forecast_demand(avg_consumption, trend, config)
        position = evaluate_stock(part.current_stock, avg_consumption, trend, config)
        alerts = generate_alerts(part, avg_consumption, position.days_until_stockout, config)

        analytics = PartAnalytics(
            part_id=part.id,
            code=part.code,
            description=part.description,
            current_stock=part.current_stock,
            minimum_stock=part.minimum_stock,
            avg_monthly_consumption=avg_consumption,
            trend=trend,
            days_until_stockout=position.days_until_stockout,
            suggested_stock=position.suggested_stock,
            criticality=position.criticality,
            forecast_30=forecast.forecast_30,
            forecast_60=forecast.forecast_60,
            forecast_90=forecast.forecast_90,
            has_seasonal_pattern=seasonality.has_seasonal_pattern,
            high_demand_months=seasonality.high_demand_months,
            prediction_confidence=score_confidence(len(events), config),
            alerts=tuple(alerts),
        )

        logger.debug(
            "Part %s: avg=%.2f trend=%s criticality=%s confidence=%d",
            part.code, avg_consumption, trend, position.criticality,
            analytics.prediction_confidence
        )
        return analytics

    # =========================================================================
    # HISTORY RESOLUTION
    # =========================================================================

    def _resolve_history(
        self,
        parts: Sequence[Part],
        history: Optional[Iterable[UsageEvent]]
    ) -> Dict[Any, List[UsageEvent]]:
        """
        Validate the batch and index usage events by part id.

        Explicit history wins; otherwise events are pulled from the history
        provider; with neither, every part has empty history.
        """
        if history is not None:
            # Read once; generators would be exhausted by validation
            history = list(history)
            validate_inputs(parts, history)
            return group_by_part(history)

        if self.history_provider is None:
            validate_inputs(parts, [])
            return {}

        by_part: Dict[Any, List[UsageEvent]] = {}
        for part in parts:
            if part.id not in by_part:
                by_part[part.id] = list(self.history_provider.fetch_usage(part.id))
        fetched = [event for events in by_part.values() for event in events]
        validate_inputs(parts, fetched)
        return by_part

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_all_analytics(
        self,
        parts: Sequence[Part],
        history: Optional[Iterable[UsageEvent]] = None
    ) -> List[PartAnalytics]:
        """
        Analytics for every part, in the same order as `parts`.

        Args:
            parts: Parts to analyze
            history: Usage events for any parts (None to use the history provider)

        Raises:
            InvalidInputError: a part or event breaks the input contract
        """
        by_part = self._resolve_history(parts, history)

        def run(part: Part) -> PartAnalytics:
            return self.analyze_part(part, by_part.get(part.id, []))

        if self.config.max_workers > 1 and len(parts) > 1:
            # Executor.map yields in submission order
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                results = list(pool.map(run, parts))
        else:
            results = [run(part) for part in parts]

        logger.info("Computed analytics for %d parts", len(results))
        return results

    def get_critical_items(
        self,
        parts: Sequence[Part],
        history: Optional[Iterable[UsageEvent]] = None
    ) -> List[PartAnalytics]:
        """
        Parts that are critical/high or run out within `medium_days`.

        Sorted by days until stock-out ascending; ties keep input order.
        """
        analytics = self.get_all_analytics(parts, history)
        return self.filter_critical(analytics)

    def filter_critical(self, analytics: Sequence[PartAnalytics]) -> List[PartAnalytics]:
        critical = [
            item for item in analytics
            if item.criticality in (CRITICALITY_CRITICAL, CRITICALITY_HIGH)
            or item.days_until_stockout <= self.config.medium_days
        ]
        return sorted(critical, key=lambda item: item.days_until_stockout)

    def get_purchase_recommendations(
        self,
        parts: Sequence[Part],
        history: Optional[Iterable[UsageEvent]] = None
    ) -> List[Recommendation]:
        """Prioritized purchase recommendations (alta, media, baja)."""
        analytics = self.get_all_analytics(parts, history)
        return self.recommendation_engine.generate_recommendations(analytics)


# =============================================================================
# FUNCTIONAL INTERFACE
# =============================================================================

def compute_analytics(
    parts: Sequence[Part],
    history: Iterable[UsageEvent],
    config: AnalyticsConfig = None
) -> List[PartAnalytics]:
    return AnalyticsEngine(config=config).get_all_analytics(parts, history)


def critical_items(
    parts: Sequence[Part],
    history: Iterable[UsageEvent],
    config: AnalyticsConfig = None
) -> List[PartAnalytics]:
    return AnalyticsEngine(config=config).get_critical_items(parts, history)


def purchase_recommendations(
    parts: Sequence[Part],
    history: Iterable[UsageEvent],
    config: AnalyticsConfig = None
) -> List[Recommendation]:
    return AnalyticsEngine(config=config).get_purchase_recommendations(parts, history)
