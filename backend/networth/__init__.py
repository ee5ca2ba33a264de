"""Core package for the net-worth aggregation engine."""

from .aggregation import Breakdown, SeriesPoint, latest_breakdown, snapshot_time_series
from .bulk_import import parse_asset_rows, parse_income_rows
from .filters import FilterSelection
from .fx import CurrencyNormalizer, normalize
from .merge import merge_asset_import, merge_income_import
from .models import AssetItem, ImportRow, IncomeRecord, Registry, Snapshot, StockPosition
from .pivot import PivotTable, build_asset_pivot, build_income_pivot

__all__ = [
    "AssetItem",
    "Breakdown",
    "CurrencyNormalizer",
    "FilterSelection",
    "ImportRow",
    "IncomeRecord",
    "PivotTable",
    "Registry",
    "SeriesPoint",
    "Snapshot",
    "StockPosition",
    "build_asset_pivot",
    "build_income_pivot",
    "latest_breakdown",
    "merge_asset_import",
    "merge_income_import",
    "normalize",
    "parse_asset_rows",
    "parse_income_rows",
    "snapshot_time_series",
]
