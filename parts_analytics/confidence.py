"""
Confidence Scorer and Alert Generator
"""

from typing import List

from .config import AnalyticsConfig, default_config
from .models import Part


def score_confidence(sample_size: int, config: AnalyticsConfig = None) -> int:
    """
    Reliability percentage for a forecast built from `sample_size` events.

    Step function over the configured tiers (>=12: 90, >=6: 75, >=3: 60,
    else 40 by default). No interpolation.
    """
    config = config or default_config
    for min_samples in sorted(config.confidence_tiers, reverse=True):
        if sample_size >= min_samples:
            return config.confidence_tiers[min_samples]
    return config.confidence_floor


def generate_alerts(
    part: Part,
    avg_monthly_consumption: float,
    days_until_stockout: int,
    config: AnalyticsConfig = None
) -> List[str]:
    """
    Build the alert list for a part, in a fixed order.

    The critical and low depletion alerts are mutually exclusive; every
    other alert is independent.
    """
    config = config or default_config
    alerts = []

    if part.current_stock <= part.minimum_stock:
        alerts.append("stock below minimum")

    if days_until_stockout <= config.critical_days:
        alerts.append(f"critical: depletes in under {config.critical_days} days")
    elif days_until_stockout <= config.high_days:
        alerts.append(f"low: depletes in under {config.high_days} days")

    if avg_monthly_consumption == 0 and part.current_stock > 0:
        alerts.append("no recent consumption — review need for stock")

    if part.current_stock > avg_monthly_consumption * config.overstock_months:
        alerts.append("possible overstock — consider reducing orders")

    return alerts
