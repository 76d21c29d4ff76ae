"""
Shared fixtures for the parts analytics test suite.
"""

import sys
from datetime import date
from pathlib import Path
from typing import List, Sequence

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from parts_analytics.config import AnalyticsConfig
from parts_analytics.models import Part, UsageEvent


def monthly_events(
    part_id,
    quantities: Sequence[int],
    start_year: int = 2025,
    start_month: int = 1,
    day: int = 15,
) -> List[UsageEvent]:
    """One usage event per consecutive month, starting at start_year/start_month."""
    events = []
    year, month = start_year, start_month
    for qty in quantities:
        events.append(UsageEvent(part_id=part_id, quantity=qty, timestamp=date(year, month, day)))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return events


@pytest.fixture
def config():
    """Default thresholds, independent of any settings.yaml on disk."""
    return AnalyticsConfig()


@pytest.fixture
def make_events():
    return monthly_events


@pytest.fixture
def fil001():
    """Oil filter below minimum with growing consumption averaging 8/month."""
    part = Part(id=1, code="FIL001", description="Filtro de aceite motor principal",
                current_stock=5, minimum_stock=10)
    events = monthly_events(1, [6, 7, 7, 9, 9, 10])
    return part, events


@pytest.fixture
def rod001():
    """Bearing well stocked against a flat 4/month consumption."""
    part = Part(id=2, code="ROD001", description="Rodamiento 6205-2RS",
                current_stock=25, minimum_stock=15)
    events = monthly_events(2, [4] * 12)
    return part, events


@pytest.fixture
def tiered_parts():
    """Parts that land in low, high and critical tiers (in that input order)."""
    low = Part(id=10, code="LOW001", description="Low", current_stock=100, minimum_stock=5)
    high = Part(id=11, code="HIGH001", description="High", current_stock=10, minimum_stock=5)
    critical = Part(id=12, code="CRIT001", description="Critical", current_stock=1, minimum_stock=5)
    history = (
        monthly_events(10, [2, 2, 2])
        + monthly_events(11, [30, 30, 30])
        + monthly_events(12, [30, 30, 30])
    )
    return [low, high, critical], history
