"""
Analytics Data Model
Value objects passed into and out of the analytics pipeline.

Inputs (Part, UsageEvent) come from the hosting application. Everything
else is derived on every call and never persisted by the engine.
"""

import sys
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple, Union

# =============================================================================
# LABELS
# =============================================================================

TREND_GROWING = "growing"
TREND_STABLE = "stable"
TREND_DECLINING = "declining"

CRITICALITY_LOW = "low"
CRITICALITY_MEDIUM = "medium"
CRITICALITY_HIGH = "high"
CRITICALITY_CRITICAL = "critical"

CRITICALITY_RANK = {
    CRITICALITY_CRITICAL: 4,
    CRITICALITY_HIGH: 3,
    CRITICALITY_MEDIUM: 2,
    CRITICALITY_LOW: 1,
}

PRIORITY_HIGH = "alta"
PRIORITY_MEDIUM = "media"
PRIORITY_LOW = "baja"

# days_until_stockout when consumption is zero. Not a day count.
NO_DEPLETION = sys.maxsize

MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


# =============================================================================
# INPUTS
# =============================================================================

@dataclass(frozen=True)
class Part:
    """A spare part as supplied by the inventory system."""
    id: Any
    code: str
    description: str
    current_stock: int
    minimum_stock: int


@dataclass(frozen=True)
class UsageEvent:
    """One consumption of a part (e.g. issued to a machine work order)."""
    part_id: Any
    quantity: int
    timestamp: Union[date, datetime, None]
    machine_id: Any = None


# =============================================================================
# DERIVED
# =============================================================================

@dataclass(frozen=True)
class MonthlyBucket:
    """Usage grouped by month. `year` is None when years are folded together."""
    month_index: int             # 0 = January ... 11 = December
    total_quantity: int
    event_count: int
    year: Optional[int] = None

    @property
    def label(self) -> str:
        month = MONTH_ABBREVIATIONS[self.month_index]
        return f"{month} {self.year}" if self.year is not None else month


@dataclass(frozen=True)
class ConsumptionPattern:
    """Calendar-month consumption summary for one part."""
    year: int
    month: int                   # 1-12
    quantity: int
    event_count: int
    machines: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class PartAnalytics:
    """Computed analytics for a single part."""

    # Identification / position
    part_id: Any
    code: str
    description: str
    current_stock: int
    minimum_stock: int

    # Demand analysis
    avg_monthly_consumption: float
    trend: str

    # Stock status
    days_until_stockout: int
    suggested_stock: int
    criticality: str

    # Forecast
    forecast_30: int
    forecast_60: int
    forecast_90: int

    # Seasonality
    has_seasonal_pattern: bool
    high_demand_months: Tuple[int, ...] = ()

    prediction_confidence: int = 0
    alerts: Tuple[str, ...] = ()

    @property
    def depletes(self) -> bool:
        """False when consumption is zero and the stock-out day is the sentinel."""
        return self.days_until_stockout != NO_DEPLETION

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "part_id": self.part_id,
            "code": self.code,
            "description": self.description,
            "current_stock": self.current_stock,
            "minimum_stock": self.minimum_stock,
            "avg_monthly_consumption": self.avg_monthly_consumption,
            "trend": self.trend,
            "days_until_stockout": self.days_until_stockout if self.depletes else None,
            "suggested_stock": self.suggested_stock,
            "criticality": self.criticality,
            "forecast": {
                "30": self.forecast_30,
                "60": self.forecast_60,
                "90": self.forecast_90,
            },
            "seasonality": {
                "has_seasonal_pattern": self.has_seasonal_pattern,
                "high_demand_months": list(self.high_demand_months),
            },
            "prediction_confidence": self.prediction_confidence,
            "alerts": list(self.alerts),
        }


@dataclass(frozen=True)
class Recommendation:
    """A suggested purchase for one part."""
    analytics: PartAnalytics
    suggested_quantity: int
    priority: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "part": self.analytics.to_dict(),
            "suggested_quantity": self.suggested_quantity,
            "priority": self.priority,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class StockPrediction:
    """Point-in-time reorder estimate derived from a part's analytics."""
    part_id: Any
    prediction_date: date
    expected_demand: int
    recommended_stock: int
    suggested_order_date: Optional[date]
    confidence: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "part_id": self.part_id,
            "prediction_date": self.prediction_date.isoformat(),
            "expected_demand": self.expected_demand,
            "recommended_stock": self.recommended_stock,
            "suggested_order_date": (
                self.suggested_order_date.isoformat() if self.suggested_order_date else None
            ),
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class StockPosition:
    """Intermediate result of the stock status evaluation."""
    days_until_stockout: int
    suggested_stock: int
    criticality: str


@dataclass(frozen=True)
class SeasonalityResult:
    has_seasonal_pattern: bool
    high_demand_months: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DemandForecast:
    forecast_30: int
    forecast_60: int
    forecast_90: int
