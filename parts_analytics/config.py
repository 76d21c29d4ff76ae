"""
Configuration for the Parts Analytics Engine.

CONFIGURATION OPTIONS:
----------------------
1. EASY WAY (Recommended): Edit settings.yaml in the project folder
   - Human-readable YAML format
   - Just edit values and save

2. PROGRAMMATIC WAY: Build an AnalyticsConfig or use with_overrides()
   - For tests, automation, or per-call tuning

Every threshold the analytics pipeline uses lives here, so tuning never
requires touching the algorithm modules.
"""

import math
from pathlib import Path
from dataclasses import dataclass, field, replace
from typing import Dict, Optional
import yaml

from .exceptions import ConfigurationError

# =============================================================================
# DEFAULT PATHS
# =============================================================================

PROJECT_PATH = Path(__file__).parent.parent
OUTPUT_PATH = PROJECT_PATH / "output"
SETTINGS_FILE = PROJECT_PATH / "settings.yaml"


@dataclass
class AnalyticsConfig:
    """Thresholds and parameters for the predictive analytics pipeline."""

    # =========================================================================
    # HISTORY BUCKETING
    # =========================================================================
    fold_years: bool = True           # Bucket by month-of-year (True) or by (year, month)
    days_per_month: int = 30          # Month length used for daily consumption rates

    # =========================================================================
    # TREND CLASSIFICATION
    # =========================================================================
    trend_window: int = 3             # Buckets averaged at each end of the history
    trend_threshold_pct: float = 15.0  # Change (%) needed to call growing/declining

    # =========================================================================
    # SEASONALITY DETECTION
    # =========================================================================
    seasonal_factor: float = 1.3      # Month flagged when total > average * factor
    seasonal_min_months: int = 3      # Distinct months required before flagging

    # =========================================================================
    # FORECAST AND STOCK TARGETS (keyed by trend label)
    # =========================================================================
    forecast_trend_factors: Dict[str, float] = field(default_factory=lambda: {
        "growing": 1.1,
        "stable": 1.0,
        "declining": 0.9,
    })

    suggested_stock_months: Dict[str, float] = field(default_factory=lambda: {
        "growing": 2.5,
        "stable": 2.0,
        "declining": 1.5,
    })

    # =========================================================================
    # CRITICALITY TIERS (days until stock-out, inclusive upper bounds)
    # =========================================================================
    critical_days: int = 7
    high_days: int = 15
    medium_days: int = 30

    # =========================================================================
    # ALERTS
    # =========================================================================
    overstock_months: float = 6       # Stock above N months of consumption is overstock

    # =========================================================================
    # PREDICTION CONFIDENCE (minimum samples -> percent)
    # =========================================================================
    confidence_tiers: Dict[int, int] = field(default_factory=lambda: {
        12: 90,
        6: 75,
        3: 60,
    })
    confidence_floor: int = 40

    # =========================================================================
    # RECOMMENDATIONS
    # =========================================================================
    priority_rank: Dict[str, int] = field(default_factory=lambda: {
        "alta": 3,
        "media": 2,
        "baja": 1,
    })

    # =========================================================================
    # PURCHASING ESTIMATES
    # =========================================================================
    lead_time_days: int = 7           # Supplier lead time used for reorder dates
    unit_cost_estimate: float = 150.0  # Flat unit cost for investment estimates
    top_n: int = 10                   # Rows in stock projection lists

    # =========================================================================
    # EXECUTION
    # =========================================================================
    max_workers: int = 1              # >1 maps the per-part pipeline over a thread pool

    output_path: Path = OUTPUT_PATH

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def get_forecast_factor(self, trend: str) -> float:
        """Forecast multiplier for a trend label (1.0 when unknown)."""
        return self.forecast_trend_factors.get(trend, 1.0)

    def get_stock_months(self, trend: str) -> float:
        """Months of consumption to hold for a trend label."""
        return self.suggested_stock_months.get(trend, self.suggested_stock_months.get("stable", 2.0))

    def get_priority_rank(self, priority: str) -> int:
        return self.priority_rank.get(priority, 0)

    def validate(self) -> "AnalyticsConfig":
        """Raise ConfigurationError if the thresholds are incoherent."""
        if not (0 <= self.critical_days < self.high_days < self.medium_days):
            raise ConfigurationError(
                f"Criticality tiers must increase: critical={self.critical_days}, "
                f"high={self.high_days}, medium={self.medium_days}"
            )
        if self.days_per_month <= 0:
            raise ConfigurationError(f"days_per_month must be positive, got {self.days_per_month}")
        if self.trend_window < 1:
            raise ConfigurationError(f"trend_window must be at least 1, got {self.trend_window}")
        if self.seasonal_factor <= 0:
            raise ConfigurationError(f"seasonal_factor must be positive, got {self.seasonal_factor}")
        if self.confidence_floor < 0 or any(v < 0 for v in self.confidence_tiers.values()):
            raise ConfigurationError("Confidence values cannot be negative")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {self.max_workers}")
        return self

    def with_overrides(self, **overrides) -> "AnalyticsConfig":
        """Return a new config with the given fields replaced."""
        return replace(self, **overrides)


# =============================================================================
# SETTINGS LOADER
# =============================================================================

def load_settings_from_yaml(yaml_path: Path = None) -> dict:
    """
    Load settings from YAML file.

    Args:
        yaml_path: Path to settings.yaml (uses default if not provided)

    Returns:
        Dictionary of settings, or empty dict if file not found
    """
    yaml_path = Path(yaml_path) if yaml_path else SETTINGS_FILE
    if not yaml_path.exists():
        return {}

    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"Warning: Could not load settings from {yaml_path}: {e}")
        return {}


def config_from_yaml(yaml_path: Path = None) -> AnalyticsConfig:
    """
    Create an AnalyticsConfig from settings.yaml.

    Missing sections and keys keep their defaults.

    Args:
        yaml_path: Path to settings.yaml (uses default if not provided)

    Returns:
        Validated AnalyticsConfig with settings applied
    """
    yaml_path = Path(yaml_path) if yaml_path else SETTINGS_FILE
    settings = load_settings_from_yaml(yaml_path)

    if not settings:
        return AnalyticsConfig()

    defaults = AnalyticsConfig()

    # Extract nested settings
    history = settings.get('history') or {}
    trend = settings.get('trend') or {}
    seasonality = settings.get('seasonality') or {}
    forecast = settings.get('forecast') or {}
    stock = settings.get('stock') or {}
    criticality = settings.get('criticality') or {}
    alerts = settings.get('alerts') or {}
    confidence = settings.get('confidence') or {}
    recs = settings.get('recommendations') or {}
    purchasing = settings.get('purchasing') or {}
    execution = settings.get('execution') or {}
    paths = settings.get('paths') or {}

    # Relative output paths are anchored at the settings file
    output_path = Path(paths.get('output', OUTPUT_PATH))
    if not output_path.is_absolute():
        output_path = yaml_path.parent / output_path

    # Confidence tiers arrive as {min_samples: percent}; YAML may give string keys
    tiers_raw = confidence.get('tiers') or {}
    confidence_tiers = {int(k): int(v) for k, v in tiers_raw.items()}

    config = AnalyticsConfig(
        # History
        fold_years=history.get('fold_years', defaults.fold_years),
        days_per_month=history.get('days_per_month', defaults.days_per_month),

        # Trend
        trend_window=trend.get('window', defaults.trend_window),
        trend_threshold_pct=trend.get('threshold_pct', defaults.trend_threshold_pct),

        # Seasonality
        seasonal_factor=seasonality.get('factor', defaults.seasonal_factor),
        seasonal_min_months=seasonality.get('min_months', defaults.seasonal_min_months),

        # Forecast / stock
        forecast_trend_factors={**defaults.forecast_trend_factors, **(forecast.get('trend_factors') or {})},
        suggested_stock_months={**defaults.suggested_stock_months, **(stock.get('months_by_trend') or {})},

        # Criticality
        critical_days=criticality.get('critical_days', defaults.critical_days),
        high_days=criticality.get('high_days', defaults.high_days),
        medium_days=criticality.get('medium_days', defaults.medium_days),

        # Alerts
        overstock_months=alerts.get('overstock_months', defaults.overstock_months),

        # Confidence
        confidence_tiers=confidence_tiers or defaults.confidence_tiers,
        confidence_floor=confidence.get('floor', defaults.confidence_floor),

        # Recommendations
        priority_rank={**defaults.priority_rank, **(recs.get('priority_rank') or {})},

        # Purchasing
        lead_time_days=purchasing.get('lead_time_days', defaults.lead_time_days),
        unit_cost_estimate=purchasing.get('unit_cost_estimate', defaults.unit_cost_estimate),
        top_n=purchasing.get('top_n', defaults.top_n),

        # Execution
        max_workers=execution.get('max_workers', defaults.max_workers),

        output_path=output_path,
    )

    return config.validate()


# Create default configuration instance
# First try to load from settings.yaml, fall back to defaults
try:
    default_config = config_from_yaml()
except (ConfigurationError, TypeError, ValueError):
    default_config = AnalyticsConfig()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def print_current_settings(config: Optional[AnalyticsConfig] = None):
    """Print current configuration settings for debugging."""
    config = config or default_config
    print("\n" + "="*60)
    print("CURRENT ANALYTICS SETTINGS")
    print("="*60)
    print(f"\nFold Years: {config.fold_years}")
    print(f"Days per Month: {config.days_per_month}")
    print(f"\nTrend Window: {config.trend_window} buckets")
    print(f"Trend Threshold: +/-{config.trend_threshold_pct:.0f}%")
    print(f"\nSeasonal Factor: {config.seasonal_factor:.2f}x (min {config.seasonal_min_months} months)")
    print(f"\nCriticality Tiers (days):")
    print(f"  - Critical: <= {config.critical_days}")
    print(f"  - High: <= {config.high_days}")
    print(f"  - Medium: <= {config.medium_days}")
    print(f"\nOverstock Threshold: {config.overstock_months} months")
    tiers = ", ".join(f">={k}: {v}%" for k, v in sorted(config.confidence_tiers.items(), reverse=True))
    print(f"Confidence Tiers: {tiers}, else {config.confidence_floor}%")
    print(f"\nLead Time: {config.lead_time_days} days")
    print(f"Workers: {config.max_workers}")
    print("="*60 + "\n")


def reload_settings(yaml_path: Path = None) -> AnalyticsConfig:
    """Reload settings from YAML file."""
    global default_config
    default_config = config_from_yaml(yaml_path)
    return default_config
