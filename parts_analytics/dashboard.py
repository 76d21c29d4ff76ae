"""
Dashboard Module
Summary figures and ranked lists built on top of computed analytics:
headline counts, stock projections per horizon, top consumers and the
purchase investment estimate.
"""

from dataclasses import dataclass
from typing import List, Sequence

from .config import AnalyticsConfig, default_config, round_half_up
from .models import (
    CRITICALITY_CRITICAL,
    CRITICALITY_HIGH,
    CRITICALITY_LOW,
    CRITICALITY_RANK,
    NO_DEPLETION,
    PRIORITY_HIGH,
    TREND_GROWING,
    PartAnalytics,
    Recommendation,
)

HORIZONS = (30, 60, 90)


@dataclass(frozen=True)
class AnalyticsSummary:
    total_items: int
    critical_items: int
    growing_items: int
    seasonal_items: int
    average_confidence: int
    critical_pct: int


@dataclass(frozen=True)
class StockProjection:
    """Expected stock position at the end of a forecast horizon."""
    analytics: PartAnalytics
    horizon_days: int
    forecast: int
    projected_stock: int
    remaining_pct: float
    needs_order: bool


def summarize(analytics: Sequence[PartAnalytics]) -> AnalyticsSummary:
    """Headline counts for a batch of analytics."""
    total = len(analytics)
    if total == 0:
        return AnalyticsSummary(0, 0, 0, 0, 0, 0)

    critical = sum(1 for a in analytics if a.criticality in (CRITICALITY_CRITICAL, CRITICALITY_HIGH))
    growing = sum(1 for a in analytics if a.trend == TREND_GROWING)
    seasonal = sum(1 for a in analytics if a.has_seasonal_pattern)
    avg_confidence = sum(a.prediction_confidence for a in analytics) / total

    return AnalyticsSummary(
        total_items=total,
        critical_items=critical,
        growing_items=growing,
        seasonal_items=seasonal,
        average_confidence=round_half_up(avg_confidence),
        critical_pct=round_half_up(critical / total * 100),
    )


def _forecast_for(analytics: PartAnalytics, horizon_days: int) -> int:
    if horizon_days == 30:
        return analytics.forecast_30
    if horizon_days == 60:
        return analytics.forecast_60
    return analytics.forecast_90


def _urgency_score(analytics: PartAnalytics) -> int:
    # Sentinel days would swamp the rank term
    days = 0 if analytics.days_until_stockout == NO_DEPLETION else analytics.days_until_stockout
    return CRITICALITY_RANK.get(analytics.criticality, 0) * 100 - days


def project_stock(
    analytics: Sequence[PartAnalytics],
    horizon_days: int = 30,
    top_n: int = None,
    config: AnalyticsConfig = None
) -> List[StockProjection]:
    """
    Project end-of-horizon stock for the most urgent parts.

    Only parts that are not low criticality or sit below their suggested
    stock are projected. Ranked by criticality, then sooner stock-out.

    Args:
        analytics: Computed part analytics
        horizon_days: 30, 60 or 90
        top_n: Rows to return (config.top_n when not given)
    """
    if horizon_days not in HORIZONS:
        raise ValueError(f"horizon_days must be one of {HORIZONS}, got {horizon_days}")

    config = config or default_config
    top_n = config.top_n if top_n is None else top_n

    candidates = [
        a for a in analytics
        if a.criticality != CRITICALITY_LOW or a.current_stock < a.suggested_stock
    ]
    candidates = sorted(candidates, key=_urgency_score, reverse=True)[:top_n]

    projections = []
    for item in candidates:
        forecast = _forecast_for(item, horizon_days)
        projected = max(0, item.current_stock - forecast)
        remaining_pct = (projected / item.current_stock * 100) if item.current_stock > 0 else 0.0
        projections.append(StockProjection(
            analytics=item,
            horizon_days=horizon_days,
            forecast=forecast,
            projected_stock=projected,
            remaining_pct=remaining_pct,
            needs_order=projected < item.minimum_stock,
        ))
    return projections


def top_consumers(analytics: Sequence[PartAnalytics], n: int = 3) -> List[PartAnalytics]:
    """Parts with the highest average monthly consumption."""
    return sorted(analytics, key=lambda a: a.avg_monthly_consumption, reverse=True)[:n]


def top_growing(analytics: Sequence[PartAnalytics], n: int = 3) -> List[PartAnalytics]:
    """Growing parts with the largest 60-day forecast."""
    growing = [a for a in analytics if a.trend == TREND_GROWING]
    return sorted(growing, key=lambda a: a.forecast_60, reverse=True)[:n]


def bulk_order_candidates(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    """High-priority recommendations, suitable for a single bulk purchase order."""
    return [r for r in recommendations if r.priority == PRIORITY_HIGH]


def estimate_investment(recommendations: Sequence[Recommendation], unit_cost: float = None,
                        config: AnalyticsConfig = None) -> float:
    """Rough purchase cost: suggested units x flat unit cost."""
    config = config or default_config
    unit_cost = config.unit_cost_estimate if unit_cost is None else unit_cost
    return float(sum(r.suggested_quantity for r in recommendations) * unit_cost)
