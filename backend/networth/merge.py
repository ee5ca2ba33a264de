"""Fold staged import rows back into the snapshot and income collections."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import AssetItem, ImportRow, IncomeRecord, Registry, Snapshot, raw_total

logger = logging.getLogger(__name__)

UPDATED_NOTE = "Updated via Bulk Import"
CREATED_NOTE = "Imported via Bulk Entry"


@dataclass(frozen=True)
class MergeResult:
    """Outcome of an asset import: new collections plus what changed."""

    snapshots: Tuple[Snapshot, ...]
    registry: Registry
    created: int = 0
    updated: int = 0


@dataclass(frozen=True)
class IncomeMergeResult:
    records: Tuple[IncomeRecord, ...]
    registry: Registry
    added: int = 0
    skipped: int = 0


def _extend_unique(existing: Tuple[str, ...], candidates: Iterable[str]) -> Tuple[str, ...]:
    seen = set(existing)
    extended = list(existing)
    for candidate in candidates:
        value = candidate.strip()
        if value and value not in seen:
            seen.add(value)
            extended.append(value)
    return tuple(extended)


def _group_rows(rows: Sequence[ImportRow]) -> Dict[Tuple[str, str], List[ImportRow]]:
    grouped: Dict[Tuple[str, str], List[ImportRow]] = {}
    for row in rows:
        grouped.setdefault((row.date, row.family_member), []).append(row)
    return grouped


def merge_asset_import(
    rows: Sequence[ImportRow],
    snapshots: Sequence[Snapshot],
    registry: Registry | None = None,
) -> MergeResult:
    """Merge staged rows into ``snapshots`` keyed by (date, family member).

    Rows sharing a key replace the items of the first existing snapshot with
    that key wholesale; keys with no snapshot get a new one. Importing the same
    rows twice therefore leaves one snapshot per key. Unknown categories and
    members are appended to the returned registry.
    """

    registry = registry or Registry()
    registry = replace(
        registry,
        categories=_extend_unique(registry.categories, (row.category for row in rows)),
        members=_extend_unique(registry.members, (row.family_member for row in rows)),
    )

    merged = list(snapshots)
    created = updated = 0
    for (row_date, member), group in _group_rows(rows).items():
        items = tuple(
            AssetItem(
                category=row.category,
                name=row.name,
                value=row.value,
                currency=row.currency,
            )
            for row in group
        )
        index = next(
            (
                i
                for i, snapshot in enumerate(merged)
                if snapshot.date == row_date and snapshot.family_member == member
            ),
            None,
        )
        if index is not None:
            merged[index] = replace(
                merged[index],
                items=items,
                total_value=raw_total(items),
                note=UPDATED_NOTE,
            )
            updated += 1
        else:
            merged.append(Snapshot.build(row_date, member, items, note=CREATED_NOTE))
            created += 1

    logger.info(
        "Merged %d import rows: %d snapshots created, %d replaced", len(rows), created, updated
    )
    return MergeResult(snapshots=tuple(merged), registry=registry, created=created, updated=updated)


def merge_income_import(
    records: Sequence[IncomeRecord],
    existing: Sequence[IncomeRecord],
    registry: Registry | None = None,
) -> IncomeMergeResult:
    """Append income records whose (date, category, name, value) is not already present."""

    registry = registry or Registry()
    registry = replace(
        registry,
        income_categories=_extend_unique(
            registry.income_categories, (record.category for record in records)
        ),
    )
    known = {record.signature() for record in existing}
    fresh = [record for record in records if record.signature() not in known]
    skipped = len(records) - len(fresh)
    logger.info("Merged %d income records, skipped %d duplicates", len(fresh), skipped)
    return IncomeMergeResult(
        records=tuple(existing) + tuple(fresh),
        registry=registry,
        added=len(fresh),
        skipped=skipped,
    )


__all__ = [
    "CREATED_NOTE",
    "IncomeMergeResult",
    "MergeResult",
    "UPDATED_NOTE",
    "merge_asset_import",
    "merge_income_import",
]
