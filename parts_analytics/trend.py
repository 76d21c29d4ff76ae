"""
Trend Classifier Module
Labels consumption as growing, stable or declining.

This is a coarse heuristic, not a significance test: it compares the mean
of the first and last few monthly buckets. A regression could replace it
as long as it returns the same three labels.
"""

from typing import Optional, Sequence

import numpy as np

from .config import AnalyticsConfig, default_config
from .models import MonthlyBucket, TREND_DECLINING, TREND_GROWING, TREND_STABLE


def trend_change_pct(
    buckets: Sequence[MonthlyBucket],
    config: AnalyticsConfig = None
) -> Optional[float]:
    """
    Percent change between the early and recent bucket averages.

    Returns None when there are too few buckets or the early average is
    zero (the change is undefined).
    """
    config = config or default_config
    window = config.trend_window

    if len(buckets) < window:
        return None

    totals = np.array([b.total_quantity for b in buckets], dtype=float)
    early = totals[:window].mean()
    recent = totals[-window:].mean()

    if early == 0:
        return None

    return float((recent - early) / early * 100)


def classify_trend(buckets: Sequence[MonthlyBucket], config: AnalyticsConfig = None) -> str:
    """Classify a chronological bucket sequence as growing/stable/declining."""
    config = config or default_config
    change = trend_change_pct(buckets, config)

    if change is None:
        return TREND_STABLE
    if change > config.trend_threshold_pct:
        return TREND_GROWING
    if change < -config.trend_threshold_pct:
        return TREND_DECLINING
    return TREND_STABLE
