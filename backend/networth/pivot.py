"""Date x holding pivot tables."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .filters import FilterSelection, income_predicate, snapshot_predicate
from .fx import DEFAULT_NORMALIZER, CurrencyNormalizer
from .models import IncomeRecord, Snapshot

EMPTY_CELL = None


def column_key(name: str, category: str) -> str:
    """Return the pivot column for a holding, e.g. ``"Chase (Bank)"``."""

    name = name.strip()
    return f"{name} ({category})" if name else f"{category} (Misc)"


@dataclass(frozen=True)
class PivotRow:
    date: str
    cells: Mapping[str, Optional[float]]
    total: float

    def as_dict(self) -> dict[str, Any]:
        return {"date": self.date, "values": dict(self.cells), "total": self.total}


@dataclass(frozen=True)
class PivotTable:
    """A dense date x column matrix.

    Every row carries a cell for every column; ``None`` marks a column with no
    holdings on that date, as opposed to a holding worth zero.
    """

    columns: Tuple[str, ...]
    rows: Tuple[PivotRow, ...]

    def __iter__(self) -> Iterator[PivotRow]:
        return iter(self.rows)

    def column_totals(self) -> Dict[str, Optional[float]]:
        totals: Dict[str, Optional[float]] = {}
        for column in self.columns:
            values = [row.cells[column] for row in self.rows if row.cells[column] is not None]
            totals[column] = sum(values) if values else EMPTY_CELL
        return totals

    def grand_total(self) -> float:
        return sum(row.total for row in self.rows)

    def as_dict(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [row.as_dict() for row in self.rows],
            "column_totals": self.column_totals(),
            "grand_total": self.grand_total(),
        }


def _build(dates: List[str], entries: List[Tuple[str, str, float]]) -> PivotTable:
    row_dates = sorted(set(dates))
    if not entries:
        return PivotTable(
            columns=(),
            rows=tuple(PivotRow(day, MappingProxyType({}), 0.0) for day in row_dates),
        )

    frame = pd.DataFrame(entries, columns=["date", "column", "value"])
    columns = sorted(frame["column"].unique().tolist())
    matrix = (
        frame.pivot_table(index="date", columns="column", values="value", aggfunc="sum")
        .reindex(index=row_dates, columns=columns)
    )

    rows: List[PivotRow] = []
    for day, series in matrix.iterrows():
        cells = {
            column: (EMPTY_CELL if pd.isna(amount) else float(amount))
            for column, amount in series.items()
        }
        total = sum(amount for amount in cells.values() if amount is not None)
        rows.append(PivotRow(date=str(day), cells=MappingProxyType(cells), total=total))
    return PivotTable(columns=tuple(columns), rows=tuple(rows))


@lru_cache(maxsize=32)
def _asset_pivot(
    snapshots: Tuple[Snapshot, ...],
    selection: FilterSelection,
    normalizer: CurrencyNormalizer,
) -> PivotTable:
    predicate = snapshot_predicate(selection)
    dates: List[str] = []
    entries: List[Tuple[str, str, float]] = []
    for snapshot in snapshots:
        if not predicate(snapshot):
            continue
        dates.append(snapshot.date)
        for item in snapshot.items:
            if selection.matches_category(item.category):
                entries.append(
                    (
                        snapshot.date,
                        column_key(item.name, item.category),
                        normalizer.normalize(item.value, item.currency),
                    )
                )
    return _build(dates, entries)


@lru_cache(maxsize=32)
def _income_pivot(
    records: Tuple[IncomeRecord, ...],
    selection: FilterSelection,
    normalizer: CurrencyNormalizer,
) -> PivotTable:
    predicate = income_predicate(selection)
    visible = [record for record in records if predicate(record)]
    entries = [
        (
            record.date,
            column_key(record.name, record.category),
            normalizer.normalize(record.value, record.currency),
        )
        for record in visible
    ]
    return _build([record.date for record in visible], entries)


def build_asset_pivot(
    snapshots: Sequence[Snapshot],
    selection: FilterSelection | None = None,
    normalizer: CurrencyNormalizer | None = None,
) -> PivotTable:
    """Pivot visible snapshot items into dates x ``"name (category)"`` columns."""

    return _asset_pivot(
        tuple(snapshots), selection or FilterSelection(), normalizer or DEFAULT_NORMALIZER
    )


def build_income_pivot(
    records: Sequence[IncomeRecord],
    selection: FilterSelection | None = None,
    normalizer: CurrencyNormalizer | None = None,
) -> PivotTable:
    return _income_pivot(
        tuple(records), selection or FilterSelection(), normalizer or DEFAULT_NORMALIZER
    )


def clear_caches() -> None:
    _asset_pivot.cache_clear()
    _income_pivot.cache_clear()


__all__ = [
    "EMPTY_CELL",
    "PivotRow",
    "PivotTable",
    "build_asset_pivot",
    "build_income_pivot",
    "clear_caches",
    "column_key",
]
