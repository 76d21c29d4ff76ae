"""
Analytics Transparency Module
Human-readable breakdown of how a part's analytics were derived.
"""

from typing import List, Optional

from .config import AnalyticsConfig, default_config
from .models import MONTH_ABBREVIATIONS, PartAnalytics, StockPrediction


def format_days(days: int, depletes: bool = True) -> str:
    return f"{days} days" if depletes else "never (no consumption)"


def format_months(month_indices) -> str:
    if not month_indices:
        return "none"
    return ", ".join(MONTH_ABBREVIATIONS[m] for m in month_indices)


def explain(
    analytics: PartAnalytics,
    config: AnalyticsConfig = None,
    prediction: Optional[StockPrediction] = None
) -> str:
    """Generate a human-readable explanation for one part."""
    config = config or default_config
    a = analytics
    lines: List[str] = []

    lines.append(f"{'='*60}")
    lines.append(f"PART: {a.code} - {a.description}")
    lines.append(f"Criticality: {a.criticality.upper()} | Confidence: {a.prediction_confidence}%")
    lines.append("")

    lines.append("CURRENT POSITION:")
    lines.append(f"  • Current Stock: {a.current_stock} units")
    lines.append(f"  • Minimum Stock: {a.minimum_stock} units")
    lines.append(f"  • Days Until Stock-Out: {format_days(a.days_until_stockout, a.depletes)}")

    lines.append("")
    lines.append("DEMAND ANALYSIS:")
    lines.append(f"  • Avg Monthly Consumption: {a.avg_monthly_consumption:.1f} units")
    lines.append(f"  • Trend: {a.trend.upper()} (threshold +/-{config.trend_threshold_pct:.0f}%)")
    if a.has_seasonal_pattern:
        lines.append(f"  • High-Demand Months: {format_months(a.high_demand_months)}")
    else:
        lines.append("  • No seasonal pattern detected")

    lines.append("")
    lines.append("FORECAST:")
    factor = config.get_forecast_factor(a.trend)
    lines.append(f"  • Trend Factor: {factor:.2f}")
    lines.append(f"  • 30 days: {a.forecast_30} | 60 days: {a.forecast_60} | 90 days: {a.forecast_90}")

    lines.append("")
    lines.append("STOCK TARGET:")
    months = config.get_stock_months(a.trend)
    lines.append(f"  • Suggested Stock ({months:g} months of consumption): {a.suggested_stock} units")
    gap = a.suggested_stock - a.current_stock
    if gap > 0:
        lines.append(f"  • Gap: {gap} units")

    if prediction is not None:
        lines.append("")
        lines.append("REORDER ESTIMATE:")
        if prediction.suggested_order_date:
            lines.append(f"  • Order By: {prediction.suggested_order_date.isoformat()} "
                         f"(lead time {config.lead_time_days} days)")
        else:
            lines.append("  • No reorder date (stock does not deplete)")

    if a.alerts:
        lines.append("")
        lines.append("ALERTS:")
        for alert in a.alerts:
            lines.append(f"  • {alert}")

    lines.append("")
    lines.append(f"{'='*60}")
    return "\n".join(lines)
