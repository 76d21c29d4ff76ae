"""
Parts Analytics Engine
======================

Predictive inventory analytics for spare parts: consumption trend,
30/60/90-day demand forecast, seasonality, stock-out estimate,
criticality and prioritized purchase recommendations.

Configuration:
- Edit settings.yaml in the project folder for easy configuration
- Or build an AnalyticsConfig for programmatic control
"""

from .config import (
    AnalyticsConfig,
    default_config,
    config_from_yaml,
    reload_settings,
    print_current_settings,
)
from .exceptions import AnalyticsError, ConfigurationError, InvalidInputError, ERROR_CODES, get_error_description
from .models import (
    Part,
    UsageEvent,
    MonthlyBucket,
    ConsumptionPattern,
    PartAnalytics,
    Recommendation,
    StockPrediction,
    NO_DEPLETION,
)
from .providers import HistoryProvider, InMemoryHistoryProvider
from .analytics_engine import AnalyticsEngine, compute_analytics, critical_items, purchase_recommendations
from .recommendation_engine import RecommendationEngine
from .forecaster import predict_stock
from .history import consumption_patterns
from .data_loader import DataLoader
from .report_generator import ReportGenerator
from .transparency import explain

__version__ = "1.0.0"
__all__ = [
    "AnalyticsConfig",
    "default_config",
    "config_from_yaml",
    "reload_settings",
    "print_current_settings",
    "AnalyticsError",
    "ConfigurationError",
    "InvalidInputError",
    "ERROR_CODES",
    "get_error_description",
    "Part",
    "UsageEvent",
    "MonthlyBucket",
    "ConsumptionPattern",
    "PartAnalytics",
    "Recommendation",
    "StockPrediction",
    "NO_DEPLETION",
    "HistoryProvider",
    "InMemoryHistoryProvider",
    "AnalyticsEngine",
    "compute_analytics",
    "critical_items",
    "purchase_recommendations",
    "RecommendationEngine",
    "predict_stock",
    "consumption_patterns",
    "DataLoader",
    "ReportGenerator",
    "explain",
]
