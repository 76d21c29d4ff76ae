#!/usr/bin/env python3
"""
Parts Analytics Generator
=========================

Computes predictive inventory analytics for spare parts from a parts
extract and a usage history extract (CSV or Excel).

Usage:
    # Full analytics table
    python generate_analytics.py --parts parts.csv --usage usage.csv

    # Parts at risk of running out, soonest first
    python generate_analytics.py --parts parts.csv --usage usage.csv --critical

    # Prioritized purchase recommendations
    python generate_analytics.py --parts parts.csv --usage usage.csv --recommendations

    # Headline counts only
    python generate_analytics.py --parts parts.csv --usage usage.csv --summary

Examples:
    # Excel workbook with every tab
    python generate_analytics.py --parts parts.xlsx --usage usage.xlsx --report

    # Explain one part and estimate its reorder date as of a given day
    python generate_analytics.py --parts parts.csv --usage usage.csv --explain FIL001 --as-of "2026-03-01"

    # Custom thresholds, four worker threads
    python generate_analytics.py --parts parts.csv --usage usage.csv --settings my_settings.yaml --workers 4
"""

import sys
import logging
import argparse
from pathlib import Path
from datetime import datetime

# Add current directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from parts_analytics.config import config_from_yaml, default_config, print_current_settings
from parts_analytics.analytics_engine import AnalyticsEngine
from parts_analytics.data_loader import DataLoader
from parts_analytics.dashboard import estimate_investment, summarize
from parts_analytics.exceptions import ConfigurationError, InvalidInputError
from parts_analytics.forecaster import predict_stock
from parts_analytics.report_generator import ReportGenerator
from parts_analytics.transparency import explain
from parts_analytics.validation import find_input_issues


def parse_date(date_str: str):
    """Parse a date string ("2026-03-01", "Mar 1 2026", ...) to a date."""
    if not date_str:
        return None

    from dateutil import parser as date_parser
    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError):
        return None


def format_days(item) -> str:
    return str(item.days_until_stockout) if item.depletes else "-"


def print_analytics_table(analytics):
    print(f"\n{'Code':<12} {'Stock':>6} {'Min':>5} {'Avg/Mo':>7} {'Trend':<10} "
          f"{'Days':>6} {'Sugg':>5} {'Crit':<9} {'F30':>4} {'Conf':>5}")
    print("-" * 80)
    for a in analytics:
        print(f"{a.code[:12]:<12} {a.current_stock:>6} {a.minimum_stock:>5} "
              f"{a.avg_monthly_consumption:>7.1f} {a.trend:<10} {format_days(a):>6} "
              f"{a.suggested_stock:>5} {a.criticality:<9} {a.forecast_30:>4} {a.prediction_confidence:>4}%")


def print_recommendations(recommendations, config):
    print(f"\n{'Priority':<9} {'Code':<12} {'Qty':>5}  Reason")
    print("-" * 70)
    for rec in recommendations:
        print(f"{rec.priority:<9} {rec.analytics.code[:12]:<12} {rec.suggested_quantity:>5}  {rec.reason}")
    investment = estimate_investment(recommendations, config=config)
    print(f"\nEstimated Investment: ${investment:,.0f}")


def print_summary(analytics):
    summary = summarize(analytics)
    print("\n" + "-" * 60)
    print("ANALYTICS SUMMARY")
    print("-" * 60)
    print(f"Parts Analyzed: {summary.total_items}")
    print(f"Critical / High: {summary.critical_items} ({summary.critical_pct}%)")
    print(f"Growing Consumption: {summary.growing_items}")
    print(f"Seasonal Pattern: {summary.seasonal_items}")
    print(f"Average Confidence: {summary.average_confidence}%")


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Parts Analytics Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument('--parts', required=True, help='Parts extract (CSV or Excel)')
    parser.add_argument('--usage', help='Usage history extract (CSV or Excel)')

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--critical', action='store_true', help='Show critical items only')
    mode.add_argument('--recommendations', action='store_true', help='Show purchase recommendations')
    mode.add_argument('--summary', action='store_true', help='Show headline counts only')
    mode.add_argument('--explain', metavar='CODE', help='Explain the analytics of one part code')

    parser.add_argument('--report', action='store_true', help='Write an Excel report')
    parser.add_argument('--settings', help='Path to a settings.yaml file')
    parser.add_argument('--workers', type=int, help='Worker threads for per-part analytics')
    parser.add_argument('--as-of', help='Reference date for reorder estimates (default: today)')
    parser.add_argument('--show-settings', action='store_true', help='Print active settings')
    parser.add_argument('--verbose', action='store_true', help='Log pipeline details')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_yaml(Path(args.settings)) if args.settings else default_config
        if args.workers is not None:
            config = config.with_overrides(max_workers=args.workers).validate()
    except ConfigurationError as e:
        print(f"\nError in settings: {e}")
        return 1

    if args.show_settings:
        print_current_settings(config)

    as_of = datetime.now().date()
    if args.as_of:
        as_of = parse_date(args.as_of)
        if as_of is None:
            print(f"\nError: could not parse --as-of date '{args.as_of}'")
            return 1

    loader = DataLoader(parts_file=args.parts, usage_file=args.usage, config=config)
    engine = AnalyticsEngine(config=config)

    try:
        print("\nLoading data...")
        parts = loader.load_parts()
        history = loader.load_usage()

        issues = find_input_issues(parts, history)
        if issues:
            print(f"\nFound {len(issues)} input issue(s):")
            for issue in issues[:10]:
                print(f"  [{issue['code']}] part {issue['part_id']!r} {issue['field']}={issue['value']!r}: {issue['issue']}")
            if len(issues) > 10:
                print(f"  ... and {len(issues) - 10} more")

        print(f"Analyzing {len(parts)} parts ({len(history)} usage events)...")
        analytics = engine.get_all_analytics(parts, history)
        critical = engine.filter_critical(analytics)
        recommendations = engine.recommendation_engine.generate_recommendations(analytics)

    except InvalidInputError as e:
        print(f"\nError: {e}")
        return 2
    except (OSError, ValueError) as e:
        print(f"\nError loading data: {e}")
        return 1

    if args.explain:
        matches = [a for a in analytics if a.code.upper() == args.explain.upper()]
        if not matches:
            print(f"\nNo part with code {args.explain}")
            return 1
        for item in matches:
            print(explain(item, config, predict_stock(item, as_of, config)))
    elif args.critical:
        print(f"\n{len(critical)} parts need attention")
        print_analytics_table(critical)
    elif args.recommendations:
        print(f"\n{len(recommendations)} purchase recommendations")
        print_recommendations(recommendations, config)
    elif args.summary:
        print_summary(analytics)
    else:
        print_analytics_table(analytics)
        print_summary(analytics)

    if args.report:
        print("\nGenerating Excel report...")
        report_gen = ReportGenerator(config=config)
        output_file = report_gen.generate_analytics_report(analytics, recommendations, critical)
        print(f"Report generated: {output_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
