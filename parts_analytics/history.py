"""
History Bucketing Module
Turns a part's raw usage events into monthly buckets and consumption rates.
"""

import logging
from typing import List, Sequence

import numpy as np
import pandas as pd

from .models import ConsumptionPattern, MonthlyBucket, UsageEvent

logger = logging.getLogger(__name__)

USAGE_COLUMNS = ["Timestamp", "Quantity", "Machine", "Year", "Month", "Month Index", "Period"]


def usage_frame(events: Sequence[UsageEvent]) -> pd.DataFrame:
    """
    Build a time-ordered DataFrame from usage events.

    The caller's list is not touched. Events with equal timestamps keep
    their input order (stable sort).
    """
    if not events:
        return pd.DataFrame(columns=USAGE_COLUMNS)

    df = pd.DataFrame({
        "Timestamp": pd.to_datetime([e.timestamp for e in events]),
        "Quantity": np.array([e.quantity for e in events], dtype=np.int64),
        "Machine": [e.machine_id for e in events],
    })
    df = df.sort_values("Timestamp", kind="mergesort").reset_index(drop=True)

    df["Year"] = df["Timestamp"].dt.year
    df["Month"] = df["Timestamp"].dt.month
    df["Month Index"] = df["Month"] - 1
    df["Period"] = df["Timestamp"].dt.to_period("M")
    return df


def bucket_usage(events: Sequence[UsageEvent], fold_years: bool = True) -> List[MonthlyBucket]:
    """
    Group usage events into monthly buckets.

    Buckets come out in order of first occurrence once events are sorted by
    time, not in calendar order: history starting in October yields
    Oct, Nov, Dec, Jan, ...

    Args:
        events: Usage events for one part, in any order
        fold_years: If True, the same month of different years shares a bucket.
                    If False, buckets are keyed by (year, month).

    Returns:
        List of MonthlyBucket (empty for empty history)
    """
    df = usage_frame(events)
    if df.empty:
        return []

    keys = ["Month Index"] if fold_years else ["Year", "Month Index"]
    grouped = (
        df.groupby(keys, sort=False)
        .agg(**{
            "Total Quantity": ("Quantity", "sum"),
            "Event Count": ("Quantity", "size"),
        })
        .reset_index()
    )

    buckets = []
    for _, row in grouped.iterrows():
        buckets.append(MonthlyBucket(
            month_index=int(row["Month Index"]),
            total_quantity=int(row["Total Quantity"]),
            event_count=int(row["Event Count"]),
            year=None if fold_years else int(row["Year"]),
        ))
    return buckets


def months_of_history(events: Sequence[UsageEvent]) -> int:
    """
    Calendar months spanned by the history, first to last usage inclusive.

    Months without usage inside the span count: two events 23 months apart
    span 24 months.
    """
    df = usage_frame(events)
    if df.empty:
        return 0
    first, last = df.iloc[0], df.iloc[-1]
    return int((last["Year"] - first["Year"]) * 12 + last["Month"] - first["Month"] + 1)


def average_monthly_consumption(events: Sequence[UsageEvent]) -> float:
    """
    Average units consumed per month of history.

    Total quantity divided by the months spanned from the first to the
    last usage (see months_of_history). Empty history gives 0.0.
    """
    df = usage_frame(events)
    if df.empty:
        return 0.0

    months = months_of_history(events)
    total = int(df["Quantity"].sum())
    return float(total / months)


def consumption_patterns(events: Sequence[UsageEvent]) -> List[ConsumptionPattern]:
    """Summarize usage per calendar month in chronological order."""
    df = usage_frame(events)
    if df.empty:
        return []

    patterns = []
    for (year, month), group in df.groupby(["Year", "Month"], sort=True):
        machines = sorted(group["Machine"].dropna().unique().tolist(), key=str)
        patterns.append(ConsumptionPattern(
            year=int(year),
            month=int(month),
            quantity=int(group["Quantity"].sum()),
            event_count=int(len(group)),
            machines=tuple(machines),
        ))

    logger.debug("Built %d consumption patterns from %d events", len(patterns), len(df))
    return patterns
