"""Time-series and breakdown aggregation over snapshots and income records."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .filters import FilterSelection, income_predicate, snapshot_predicate
from .fx import DEFAULT_NORMALIZER, CurrencyNormalizer
from .models import AssetItem, IncomeRecord, Snapshot

logger = logging.getLogger(__name__)

OTHERS_LABEL = "Others"
DEFAULT_TOP_N = 10


def date_sort_key(value: str) -> Tuple[int, str]:
    """Order ISO dates chronologically; unparseable dates sort last by text."""

    try:
        return (0, date.fromisoformat(value).isoformat())
    except (TypeError, ValueError):
        return (1, str(value))


@dataclass(frozen=True)
class SeriesPoint:
    """Normalized amounts for one date, keyed by category or item name."""

    date: str
    values: Mapping[str, float]
    total: float

    def as_dict(self) -> dict[str, Any]:
        return {"date": self.date, "values": dict(self.values), "total": self.total}


class _SeriesBuilder:
    def __init__(self) -> None:
        self._values: Dict[str, Dict[str, float]] = {}
        self._totals: Dict[str, float] = {}

    def add(self, day: str, key: str, amount: float) -> None:
        bucket = self._values.setdefault(day, {})
        bucket[key] = bucket.get(key, 0.0) + amount
        self._totals[day] = self._totals.get(day, 0.0) + amount

    def touch(self, day: str) -> None:
        self._values.setdefault(day, {})
        self._totals.setdefault(day, 0.0)

    def build(self) -> Tuple[SeriesPoint, ...]:
        return tuple(
            SeriesPoint(
                date=day,
                values=MappingProxyType(dict(self._values[day])),
                total=self._totals[day],
            )
            for day in sorted(self._values, key=date_sort_key)
        )


@lru_cache(maxsize=64)
def _snapshot_series(
    snapshots: Tuple[Snapshot, ...],
    selection: FilterSelection,
    normalizer: CurrencyNormalizer,
) -> Tuple[SeriesPoint, ...]:
    predicate = snapshot_predicate(selection)
    builder = _SeriesBuilder()
    for snapshot in snapshots:
        if not predicate(snapshot):
            continue
        builder.touch(snapshot.date)
        for item in snapshot.items:
            if not selection.matches_category(item.category):
                continue
            key = item.category if selection.all_categories else item.name
            builder.add(snapshot.date, key, normalizer.normalize(item.value, item.currency))
    return builder.build()


@lru_cache(maxsize=64)
def _income_series(
    records: Tuple[IncomeRecord, ...],
    selection: FilterSelection,
    normalizer: CurrencyNormalizer,
) -> Tuple[SeriesPoint, ...]:
    predicate = income_predicate(selection)
    builder = _SeriesBuilder()
    for record in records:
        if not predicate(record):
            continue
        key = record.category if selection.all_categories else record.name
        builder.add(record.date, key, normalizer.normalize(record.value, record.currency))
    return builder.build()


def snapshot_time_series(
    snapshots: Sequence[Snapshot],
    selection: FilterSelection | None = None,
    normalizer: CurrencyNormalizer | None = None,
) -> List[SeriesPoint]:
    """Group visible snapshots by date into normalized per-key sums.

    With every category selected the keys are item categories; with a single
    category selected they are the item names inside it, so the chart drills
    into that category. A date's ``total`` is the sum of its keyed values.
    """

    return list(
        _snapshot_series(
            tuple(snapshots),
            selection or FilterSelection(),
            normalizer or DEFAULT_NORMALIZER,
        )
    )


def income_time_series(
    records: Sequence[IncomeRecord],
    selection: FilterSelection | None = None,
    normalizer: CurrencyNormalizer | None = None,
) -> List[SeriesPoint]:
    """Income counterpart of :func:`snapshot_time_series`."""

    return list(
        _income_series(
            tuple(records),
            selection or FilterSelection(),
            normalizer or DEFAULT_NORMALIZER,
        )
    )


def series_keys(points: Iterable[SeriesPoint]) -> List[str]:
    """Return the distinct series keys in first-seen order."""

    keys: Dict[str, None] = {}
    for point in points:
        for key in point.values:
            keys.setdefault(key, None)
    return list(keys)


@dataclass(frozen=True)
class BreakdownEntry:
    """A pie slice. ``value`` is the slice size, ``original_value`` the signed amount."""

    name: str
    value: float
    original_value: float

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "originalValue": self.original_value}


@dataclass(frozen=True)
class Breakdown:
    date: Optional[str]
    assets: Tuple[BreakdownEntry, ...] = ()
    liabilities: Tuple[BreakdownEntry, ...] = ()

    @property
    def net(self) -> float:
        return sum(entry.original_value for entry in self.assets) + sum(
            entry.original_value for entry in self.liabilities
        )


def _collapse_tail(entries: List[BreakdownEntry], top_n: int) -> Tuple[BreakdownEntry, ...]:
    if len(entries) <= top_n:
        return tuple(entries)
    head, tail = entries[:top_n], entries[top_n:]
    others = BreakdownEntry(
        name=OTHERS_LABEL,
        value=sum(entry.value for entry in tail),
        original_value=sum(entry.original_value for entry in tail),
    )
    return tuple(head) + (others,)


def _aggregate_by_name(
    items: Iterable[AssetItem], normalizer: CurrencyNormalizer
) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for item in items:
        name = item.name.strip() or item.category
        totals[name] = totals.get(name, 0.0) + normalizer.normalize(item.value, item.currency)
    return totals


def latest_breakdown(
    snapshots: Sequence[Snapshot],
    selection: FilterSelection | None = None,
    normalizer: CurrencyNormalizer | None = None,
    *,
    top_n: int = DEFAULT_TOP_N,
) -> Breakdown:
    """Split the latest visible date into asset and liability slices.

    Snapshots are restricted by member and month range only; the category
    selection then picks items within the latest date. Items are summed per
    name and each side keeps its ``top_n`` largest entries, the rest folding
    into a single ``Others`` entry.
    """

    selection = selection or FilterSelection()
    normalizer = normalizer or DEFAULT_NORMALIZER
    predicate = snapshot_predicate(selection.without_category())
    visible = [snapshot for snapshot in snapshots if predicate(snapshot)]
    if not visible:
        return Breakdown(date=None)

    latest = max(snapshot.date for snapshot in visible)
    items = (
        item
        for snapshot in visible
        if snapshot.date == latest
        for item in snapshot.items
        if selection.matches_category(item.category)
    )
    totals = _aggregate_by_name(items, normalizer)

    assets = sorted(
        (BreakdownEntry(name, amount, amount) for name, amount in totals.items() if amount > 0),
        key=lambda entry: entry.value,
        reverse=True,
    )
    liabilities = sorted(
        (BreakdownEntry(name, abs(amount), amount) for name, amount in totals.items() if amount < 0),
        key=lambda entry: entry.value,
        reverse=True,
    )
    return Breakdown(
        date=latest,
        assets=_collapse_tail(assets, top_n),
        liabilities=_collapse_tail(liabilities, top_n),
    )


def clear_caches() -> None:
    """Drop memoized series, e.g. after a bulk data reset."""

    _snapshot_series.cache_clear()
    _income_series.cache_clear()


__all__ = [
    "Breakdown",
    "BreakdownEntry",
    "OTHERS_LABEL",
    "SeriesPoint",
    "clear_caches",
    "date_sort_key",
    "income_time_series",
    "latest_breakdown",
    "series_keys",
    "snapshot_time_series",
]
