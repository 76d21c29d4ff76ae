"""
Report Generator Module
Outputs computed analytics to an Excel workbook with multiple tabs:
Summary, Analytics, Critical Items, Recommendations and Parameters.
"""

import warnings
from datetime import datetime
from typing import List, Sequence

import pandas as pd

warnings.filterwarnings('ignore', category=UserWarning, module='openpyxl')

from .config import AnalyticsConfig, default_config
from .dashboard import bulk_order_candidates, estimate_investment, summarize
from .models import MONTH_ABBREVIATIONS, PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, PartAnalytics, Recommendation
from .recommendation_engine import RecommendationEngine
from .transparency import format_months

ANALYTICS_COLUMNS = {
    "code": "Code",
    "description": "Description",
    "current_stock": "Current Stock",
    "minimum_stock": "Minimum Stock",
    "avg_monthly_consumption": "Avg Monthly Consumption",
    "trend": "Trend",
    "days_until_stockout": "Days Until Stock-Out",
    "suggested_stock": "Suggested Stock",
    "criticality": "Criticality",
    "forecast_30": "Forecast 30d",
    "forecast_60": "Forecast 60d",
    "forecast_90": "Forecast 90d",
    "high_demand_months": "High Demand Months",
    "prediction_confidence": "Confidence %",
    "alerts": "Alerts",
}


def analytics_frame(analytics: Sequence[PartAnalytics]) -> pd.DataFrame:
    """One row per part, readable column names."""
    rows = []
    for a in analytics:
        rows.append({
            "code": a.code,
            "description": a.description,
            "current_stock": a.current_stock,
            "minimum_stock": a.minimum_stock,
            "avg_monthly_consumption": round(a.avg_monthly_consumption, 2),
            "trend": a.trend,
            # Sentinel is not a day count; leave the cell empty
            "days_until_stockout": a.days_until_stockout if a.depletes else None,
            "suggested_stock": a.suggested_stock,
            "criticality": a.criticality,
            "forecast_30": a.forecast_30,
            "forecast_60": a.forecast_60,
            "forecast_90": a.forecast_90,
            "high_demand_months": ", ".join(MONTH_ABBREVIATIONS[m] for m in a.high_demand_months),
            "prediction_confidence": a.prediction_confidence,
            "alerts": "; ".join(a.alerts),
        })
    df = pd.DataFrame(rows, columns=list(ANALYTICS_COLUMNS))
    return df.rename(columns=ANALYTICS_COLUMNS)


def recommendations_frame(recommendations: Sequence[Recommendation]) -> pd.DataFrame:
    rows = []
    for rec in recommendations:
        a = rec.analytics
        rows.append({
            "Priority": rec.priority,
            "Code": a.code,
            "Description": a.description,
            "Suggested Qty": rec.suggested_quantity,
            "Current Stock": a.current_stock,
            "Suggested Stock": a.suggested_stock,
            "Forecast 60d": a.forecast_60,
            "Criticality": a.criticality,
            "Reason": rec.reason,
        })
    return pd.DataFrame(rows, columns=[
        "Priority", "Code", "Description", "Suggested Qty", "Current Stock",
        "Suggested Stock", "Forecast 60d", "Criticality", "Reason",
    ])


class ReportGenerator:
    """Generate Excel reports from analytics results."""

    def __init__(self, config: AnalyticsConfig = None):
        self.config = config or default_config
        self.output_path = self.config.output_path
        self.output_path.mkdir(parents=True, exist_ok=True)
        self.recommendation_engine = RecommendationEngine(config=self.config)

    def generate_analytics_report(
        self,
        analytics: Sequence[PartAnalytics],
        recommendations: Sequence[Recommendation] = None,
        critical: Sequence[PartAnalytics] = None,
        filename: str = None
    ) -> str:
        """
        Generate the analytics workbook.

        Args:
            analytics: Output of AnalyticsEngine.get_all_analytics()
            recommendations: Purchase recommendations (empty tab if None)
            critical: Critical items (empty tab if None)
            filename: Optional output filename (auto-generated if not provided)

        Returns:
            Path to generated Excel file
        """
        recommendations = list(recommendations or [])
        critical = list(critical or [])

        if not filename:
            date_str = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"PartsAnalytics_{date_str}.xlsx"

        output_file = self.output_path / filename

        with pd.ExcelWriter(output_file, engine='openpyxl') as writer:
            self._write_summary_tab(writer, analytics, recommendations)
            self._write_frame_tab(writer, analytics_frame(analytics), "Analytics", "No parts analyzed")
            self._write_frame_tab(writer, analytics_frame(critical), "Critical Items", "No critical items")
            self._write_frame_tab(
                writer, recommendations_frame(recommendations), "Recommendations",
                "No recommendations generated"
            )
            self._write_parameters_tab(writer)

        return str(output_file)

    def _write_frame_tab(self, writer: pd.ExcelWriter, df: pd.DataFrame, sheet_name: str, empty_message: str):
        if df.empty:
            df = pd.DataFrame([[empty_message]], columns=["Message"])
        df.to_excel(writer, sheet_name=sheet_name, index=False)

    def _write_summary_tab(
        self,
        writer: pd.ExcelWriter,
        analytics: Sequence[PartAnalytics],
        recommendations: List[Recommendation]
    ):
        """Write Executive Summary tab."""
        summary = summarize(analytics)
        rows = []

        rows.append(["PARTS ANALYTICS REPORT", ""])
        rows.append(["Generated", datetime.now().strftime("%Y-%m-%d %H:%M")])
        rows.append(["", ""])

        rows.append(["OVERVIEW", ""])
        rows.append(["Parts Analyzed", summary.total_items])
        rows.append(["Critical / High Parts", summary.critical_items])
        rows.append(["Critical %", f"{summary.critical_pct}%"])
        rows.append(["Growing Consumption", summary.growing_items])
        rows.append(["Seasonal Pattern", summary.seasonal_items])
        rows.append(["Average Confidence", f"{summary.average_confidence}%"])
        rows.append(["", ""])

        rows.append(["PURCHASING", ""])
        rows.append(["Recommendations", len(recommendations)])
        rows.append(["Bulk Order Candidates", len(bulk_order_candidates(recommendations))])
        investment = estimate_investment(recommendations, config=self.config)
        rows.append(["Estimated Investment", f"${investment:,.0f}"])
        rows.append(["", ""])

        by_priority = self.recommendation_engine.group_by_priority(recommendations)
        rows.append(["PRIORITY BREAKDOWN", "Parts / Units"])
        for priority in [PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW]:
            data = by_priority.get(priority, {})
            rows.append([priority, f"{data.get('count', 0)} / {data.get('total_units', 0)}"])

        df = pd.DataFrame(rows, columns=["Item", "Value"])
        df.to_excel(writer, sheet_name="Summary", index=False)

    def _write_parameters_tab(self, writer: pd.ExcelWriter):
        """Write Parameters tab for reproducibility."""
        c = self.config
        rows = []
        rows.append(["THRESHOLDS", ""])
        rows.append(["Fold Years", c.fold_years])
        rows.append(["Days per Month", c.days_per_month])
        rows.append(["Trend Window (buckets)", c.trend_window])
        rows.append(["Trend Threshold %", c.trend_threshold_pct])
        rows.append(["Seasonal Factor", c.seasonal_factor])
        rows.append(["Seasonal Min Months", c.seasonal_min_months])
        rows.append(["Critical Days", c.critical_days])
        rows.append(["High Days", c.high_days])
        rows.append(["Medium Days", c.medium_days])
        rows.append(["Overstock Months", c.overstock_months])
        for trend, factor in c.forecast_trend_factors.items():
            rows.append([f"Forecast Factor ({trend})", factor])
        for trend, months in c.suggested_stock_months.items():
            rows.append([f"Stock Months ({trend})", months])
        for min_samples, pct in sorted(c.confidence_tiers.items(), reverse=True):
            rows.append([f"Confidence (>= {min_samples} events)", pct])
        rows.append(["Confidence Floor", c.confidence_floor])
        rows.append(["Lead Time (days)", c.lead_time_days])
        rows.append(["Unit Cost Estimate", c.unit_cost_estimate])

        df = pd.DataFrame(rows, columns=["Parameter", "Value"])
        df.to_excel(writer, sheet_name="Parameters", index=False)

    def generate_quick_summary(
        self,
        analytics: Sequence[PartAnalytics],
        recommendations: Sequence[Recommendation] = ()
    ) -> str:
        """Generate a quick text summary of an analytics run."""
        summary = summarize(analytics)
        recommendations = list(recommendations)
        investment = estimate_investment(recommendations, config=self.config)

        text = f"""
PARTS ANALYTICS - QUICK SUMMARY
===============================
Parts Analyzed: {summary.total_items}
Critical / High: {summary.critical_items} ({summary.critical_pct}%)
Growing Consumption: {summary.growing_items}
Seasonal Pattern: {summary.seasonal_items}
Average Confidence: {summary.average_confidence}%

PURCHASING:
- Recommendations: {len(recommendations)}
- Estimated Investment: ${investment:,.0f}

TOP 10 RECOMMENDATIONS (Priority | Code | Qty):
"""
        for i, rec in enumerate(recommendations[:10], 1):
            a = rec.analytics
            seasonal = f" [peaks: {format_months(a.high_demand_months)}]" if a.has_seasonal_pattern else ""
            text += f"  {i}. {rec.priority:5} | {a.code[:15]:15} Qty: {rec.suggested_quantity:4d}  {rec.reason}{seasonal}\n"

        return text
