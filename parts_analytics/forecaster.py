"""
Demand Forecaster Module
Projects 30/60/90-day demand and reorder dates.

Formula:
    forecast_30 = round(avg monthly consumption x trend factor)
    forecast_60 = 2 x forecast_30
    forecast_90 = 3 x forecast_30
"""

from datetime import date, datetime, timedelta
from typing import Union

from .config import AnalyticsConfig, default_config, round_half_up
from .models import DemandForecast, PartAnalytics, StockPrediction


def forecast_demand(
    avg_monthly_consumption: float,
    trend: str,
    config: AnalyticsConfig = None
) -> DemandForecast:
    """Forecast demand for the next 30, 60 and 90 days."""
    config = config or default_config

    if avg_monthly_consumption <= 0:
        return DemandForecast(forecast_30=0, forecast_60=0, forecast_90=0)

    forecast_30 = max(0, round_half_up(avg_monthly_consumption * config.get_forecast_factor(trend)))
    return DemandForecast(
        forecast_30=forecast_30,
        forecast_60=forecast_30 * 2,
        forecast_90=forecast_30 * 3,
    )


def predict_stock(
    analytics: PartAnalytics,
    as_of: Union[date, datetime],
    config: AnalyticsConfig = None
) -> StockPrediction:
    """
    Estimate when to place the next order for a part.

    The order date is the stock-out day pulled forward by the supplier lead
    time, never earlier than `as_of`. Parts that never deplete get no date.
    """
    config = config or default_config
    if isinstance(as_of, datetime):
        as_of = as_of.date()

    if analytics.depletes:
        lead = max(0, analytics.days_until_stockout - config.lead_time_days)
        order_date = as_of + timedelta(days=lead)
    else:
        order_date = None

    return StockPrediction(
        part_id=analytics.part_id,
        prediction_date=as_of + timedelta(days=config.days_per_month),
        expected_demand=analytics.forecast_30,
        recommended_stock=analytics.suggested_stock,
        suggested_order_date=order_date,
        confidence=analytics.prediction_confidence,
    )
