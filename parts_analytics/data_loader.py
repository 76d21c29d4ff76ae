"""
Data Loader Module
Loads parts and usage history extracts (CSV or Excel) into engine inputs.

Column names are normalized and the spare-parts application's native
(Spanish) column names are accepted as aliases.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .config import AnalyticsConfig, default_config
from .models import Part, UsageEvent

PART_ALIASES = {
    "part_id": "id",
    "codigo": "code",
    "descripcion": "description",
    "nombre": "description",
    "stock_actual": "current_stock",
    "cantidad": "current_stock",
    "stock": "current_stock",
    "stock_minimo": "minimum_stock",
    "min_stock": "minimum_stock",
}

USAGE_ALIASES = {
    "repuesto_id": "part_id",
    "cantidad_usada": "quantity",
    "cantidad": "quantity",
    "qty": "quantity",
    "fecha": "timestamp",
    "date": "timestamp",
    "maquina_id": "machine_id",
}

PART_COLUMNS = ["id", "code", "description", "current_stock", "minimum_stock"]
USAGE_COLUMNS = ["part_id", "quantity", "timestamp"]


class DataLoader:
    """Load parts and usage extracts; serves usage as a history provider."""

    def __init__(
        self,
        parts_file: Path = None,
        usage_file: Path = None,
        config: AnalyticsConfig = None
    ):
        self.config = config or default_config
        self.parts_file = Path(parts_file) if parts_file else None
        self.usage_file = Path(usage_file) if usage_file else None
        self._cache: Dict[str, Any] = {}

    # =========================================================================
    # FILE READING
    # =========================================================================

    def _read_table(self, file_path: Path) -> pd.DataFrame:
        """Read a CSV or Excel file into a DataFrame."""
        suffix = file_path.suffix.lower()
        if suffix in (".xlsx", ".xlsm", ".xls"):
            return pd.read_excel(file_path)
        return pd.read_csv(file_path)

    def _normalize_columns(self, df: pd.DataFrame, aliases: Dict[str, str]) -> pd.DataFrame:
        """Standardize column names: trimmed, lower-case, underscores, aliases mapped."""
        df = df.copy()
        df.columns = (
            df.columns.astype(str).str.strip().str.lower().str.replace(r"\s+", "_", regex=True)
        )
        rename = {col: aliases[col] for col in df.columns
                  if col in aliases and aliases[col] not in df.columns}
        return df.rename(columns=rename)

    def _require(self, df: pd.DataFrame, columns: List[str], file_path: Path):
        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise ValueError(f"{file_path.name}: missing required column(s) {', '.join(missing)}")

    # =========================================================================
    # PARTS
    # =========================================================================

    def load_parts_frame(self, use_cache: bool = True) -> pd.DataFrame:
        cache_key = "parts"
        if use_cache and cache_key in self._cache:
            return self._cache[cache_key]

        if self.parts_file is None:
            raise ValueError("No parts file configured")

        df = self._normalize_columns(self._read_table(self.parts_file), PART_ALIASES)
        if "description" not in df.columns:
            df["description"] = ""
        self._require(df, PART_COLUMNS, self.parts_file)

        df["code"] = df["code"].astype(str).str.strip()
        df["description"] = df["description"].fillna("").astype(str).str.strip()

        self._cache[cache_key] = df
        return df

    def load_parts(self, use_cache: bool = True) -> List[Part]:
        """Load parts in file order."""
        df = self.load_parts_frame(use_cache=use_cache)
        return [
            Part(
                id=_to_python(row["id"]),
                code=row["code"],
                description=row["description"],
                current_stock=_to_int(row["current_stock"]),
                minimum_stock=_to_int(row["minimum_stock"]),
            )
            for _, row in df.iterrows()
        ]

    # =========================================================================
    # USAGE HISTORY
    # =========================================================================

    def load_usage_frame(self, use_cache: bool = True) -> pd.DataFrame:
        cache_key = "usage"
        if use_cache and cache_key in self._cache:
            return self._cache[cache_key]

        if self.usage_file is None:
            df = pd.DataFrame(columns=USAGE_COLUMNS + ["machine_id"])
            self._cache[cache_key] = df
            return df

        df = self._normalize_columns(self._read_table(self.usage_file), USAGE_ALIASES)
        self._require(df, USAGE_COLUMNS, self.usage_file)

        if "machine_id" not in df.columns:
            df["machine_id"] = None

        # Unparseable dates become NaT and are rejected by validation later
        df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce")

        self._cache[cache_key] = df
        return df

    def load_usage(self, use_cache: bool = True) -> List[UsageEvent]:
        """Load every usage event in file order."""
        cache_key = "usage_events"
        if use_cache and cache_key in self._cache:
            return list(self._cache[cache_key])

        df = self.load_usage_frame(use_cache=use_cache)
        events = [
            UsageEvent(
                part_id=_to_python(row["part_id"]),
                quantity=_to_int(row["quantity"]),
                timestamp=None if pd.isna(row["timestamp"]) else row["timestamp"].to_pydatetime(),
                machine_id=_to_python(row["machine_id"]),
            )
            for _, row in df.iterrows()
        ]

        self._cache[cache_key] = events
        return list(events)

    def fetch_usage(self, part_id: Any) -> List[UsageEvent]:
        """Usage events of one part (HistoryProvider interface)."""
        return [event for event in self.load_usage() if event.part_id == part_id]

    def clear_cache(self):
        self._cache = {}


# =============================================================================
# VALUE CONVERSION
# =============================================================================

def _to_python(value: Any) -> Optional[Any]:
    """Convert numpy scalars to Python values; NaN becomes None."""
    if value is None:
        return None
    if isinstance(value, float) and np.isnan(value):
        return None
    if isinstance(value, np.generic):
        value = value.item()
        if isinstance(value, float) and np.isnan(value):
            return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _to_int(value: Any) -> Any:
    """
    Whole numbers become int. Anything else is passed through unchanged
    so validation can report it.
    """
    value = _to_python(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return value
    return value
