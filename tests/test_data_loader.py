"""Tests for loading parts and usage extracts."""

import pandas as pd
import pytest

from parts_analytics.analytics_engine import AnalyticsEngine
from parts_analytics.data_loader import DataLoader
from parts_analytics.validation import find_input_issues


@pytest.fixture
def extracts(tmp_path):
    """Parts and usage CSVs using the application's native column names."""
    parts = pd.DataFrame({
        "ID": [1, 2],
        "Codigo": ["FIL001", " ROD001 "],
        "Nombre": ["Filtro de aceite", "Rodamiento 6205-2RS"],
        "Stock Actual": [5, 25],
        "Stock Minimo": [10, 15],
    })
    usage = pd.DataFrame({
        "repuesto_id": [1] * 6 + [2] * 12,
        "cantidad_usada": [6, 7, 7, 9, 9, 10] + [4] * 12,
        "fecha": [f"2025-{m:02d}-15" for m in range(1, 7)] + [f"2025-{m:02d}-15" for m in range(1, 13)],
        "maquina_id": [101] * 18,
    })
    parts_file = tmp_path / "parts.csv"
    usage_file = tmp_path / "usage.csv"
    parts.to_csv(parts_file, index=False)
    usage.to_csv(usage_file, index=False)
    return parts_file, usage_file


class TestDataLoader:

    def test_load_parts_with_aliases(self, extracts, config):
        parts_file, _ = extracts
        parts = DataLoader(parts_file=parts_file, config=config).load_parts()

        assert [p.code for p in parts] == ["FIL001", "ROD001"]
        assert parts[0].id == 1
        assert parts[0].description == "Filtro de aceite"
        assert (parts[1].current_stock, parts[1].minimum_stock) == (25, 15)
        assert isinstance(parts[0].current_stock, int)

    def test_load_usage(self, extracts, config):
        parts_file, usage_file = extracts
        events = DataLoader(parts_file, usage_file, config).load_usage()

        assert len(events) == 18
        assert events[0].part_id == 1
        assert events[0].quantity == 6
        assert events[0].machine_id == 101
        assert events[0].timestamp.year == 2025

    def test_loaded_data_feeds_engine(self, extracts, config):
        loader = DataLoader(*extracts, config=config)
        analytics = AnalyticsEngine(config=config).get_all_analytics(loader.load_parts(), loader.load_usage())

        assert [a.days_until_stockout for a in analytics] == [18, 187]
        assert [a.criticality for a in analytics] == ["medium", "low"]

    def test_loader_as_history_provider(self, extracts, config):
        loader = DataLoader(*extracts, config=config)
        engine = AnalyticsEngine(config=config, history_provider=loader)

        assert len(loader.fetch_usage(2)) == 12
        [filter_part, _] = engine.get_all_analytics(loader.load_parts())
        assert filter_part.avg_monthly_consumption == 8.0

    def test_no_usage_file(self, extracts, config):
        parts_file, _ = extracts
        assert DataLoader(parts_file=parts_file, config=config).load_usage() == []

    def test_missing_column(self, tmp_path, config):
        parts_file = tmp_path / "parts.csv"
        pd.DataFrame({"id": [1], "code": ["X"], "current_stock": [1]}).to_csv(parts_file, index=False)

        with pytest.raises(ValueError, match="minimum_stock"):
            DataLoader(parts_file=parts_file, config=config).load_parts()

    def test_bad_values_reach_validation(self, tmp_path, config):
        parts_file = tmp_path / "parts.csv"
        usage_file = tmp_path / "usage.csv"
        pd.DataFrame({
            "id": [1], "code": ["X"], "current_stock": [-2], "minimum_stock": [0],
        }).to_csv(parts_file, index=False)
        pd.DataFrame({
            "part_id": [1, 1], "quantity": ["3", "lots"], "date": ["2025-01-01", "not a date"],
        }).to_csv(usage_file, index=False)

        loader = DataLoader(parts_file, usage_file, config)
        issues = find_input_issues(loader.load_parts(), loader.load_usage())

        assert [i["code"] for i in issues] == ["INP001", "INP006", "INP004"]

    def test_excel_parts(self, tmp_path, config):
        parts_file = tmp_path / "parts.xlsx"
        pd.DataFrame({
            "id": ["A-1"], "code": ["BEL002"], "description": ["Correa"],
            "current_stock": [3], "minimum_stock": [5],
        }).to_excel(parts_file, index=False)

        [part] = DataLoader(parts_file=parts_file, config=config).load_parts()
        assert (part.id, part.code, part.current_stock) == ("A-1", "BEL002", 3)

    def test_cache(self, extracts, config):
        loader = DataLoader(*extracts, config=config)
        first = loader.load_usage()
        first.clear()

        assert len(loader.load_usage()) == 18
        loader.clear_cache()
        assert len(loader.load_usage()) == 18
