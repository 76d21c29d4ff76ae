"""
Stock Status Evaluator Module
Days until stock-out, suggested stock level and criticality tier.
"""

import math

from .config import AnalyticsConfig, default_config, round_half_up
from .models import (
    CRITICALITY_CRITICAL,
    CRITICALITY_HIGH,
    CRITICALITY_LOW,
    CRITICALITY_MEDIUM,
    NO_DEPLETION,
    StockPosition,
)


def days_until_stockout(
    current_stock: int,
    avg_monthly_consumption: float,
    config: AnalyticsConfig = None
) -> int:
    """
    Whole days of stock left at the current consumption rate.

    Returns NO_DEPLETION when consumption is zero. Zero stock with real
    consumption is 0 days.
    """
    config = config or default_config
    if avg_monthly_consumption <= 0:
        return NO_DEPLETION

    # stock / (monthly / days_per_month), multiplied out
    days = math.floor(current_stock * config.days_per_month / avg_monthly_consumption)
    return int(min(max(days, 0), NO_DEPLETION - 1))


def suggested_stock(avg_monthly_consumption: float, trend: str, config: AnalyticsConfig = None) -> int:
    """Stock to hold: N months of consumption, N set by trend."""
    config = config or default_config
    return max(0, round_half_up(avg_monthly_consumption * config.get_stock_months(trend)))


def classify_criticality(days: int, config: AnalyticsConfig = None) -> str:
    """
    Map days until stock-out to a criticality tier.

    The no-depletion sentinel is always low, even at zero stock.
    """
    config = config or default_config
    if days == NO_DEPLETION:
        return CRITICALITY_LOW
    if days <= config.critical_days:
        return CRITICALITY_CRITICAL
    if days <= config.high_days:
        return CRITICALITY_HIGH
    if days <= config.medium_days:
        return CRITICALITY_MEDIUM
    return CRITICALITY_LOW


def evaluate_stock(
    current_stock: int,
    avg_monthly_consumption: float,
    trend: str,
    config: AnalyticsConfig = None
) -> StockPosition:
    config = config or default_config
    days = days_until_stockout(current_stock, avg_monthly_consumption, config)
    return StockPosition(
        days_until_stockout=days,
        suggested_stock=suggested_stock(avg_monthly_consumption, trend, config),
        criticality=classify_criticality(days, config),
    )
