"""
Seasonality Detector Module
Finds months of the year whose consumption runs well above the part's
average month.
"""

from typing import Sequence

from .config import AnalyticsConfig, default_config
from .history import usage_frame
from .models import SeasonalityResult, UsageEvent


def monthly_totals(events: Sequence[UsageEvent]) -> dict:
    """Total quantity per month index (0-11), all years folded together."""
    df = usage_frame(events)
    if df.empty:
        return {}
    totals = df.groupby("Month Index")["Quantity"].sum()
    return {int(month): int(qty) for month, qty in totals.items()}


def detect_seasonality(
    events: Sequence[UsageEvent],
    config: AnalyticsConfig = None
) -> SeasonalityResult:
    """
    Flag high-demand months.

    Consumption is always folded to month-of-year here, whatever bucketing
    the trend classifier uses. A month is high-demand when its total exceeds
    the mean monthly total times `seasonal_factor`. Fewer than
    `seasonal_min_months` distinct months never produce a pattern.

    Returns:
        SeasonalityResult with flagged month indices sorted ascending
    """
    config = config or default_config
    totals = monthly_totals(events)

    if len(totals) < config.seasonal_min_months:
        return SeasonalityResult(has_seasonal_pattern=False, high_demand_months=())

    overall_avg = sum(totals.values()) / len(totals)
    threshold = overall_avg * config.seasonal_factor

    flagged = tuple(sorted(month for month, qty in totals.items() if qty > threshold))
    return SeasonalityResult(has_seasonal_pattern=bool(flagged), high_demand_months=flagged)
