"""Category and family-member maintenance.

Renames cascade into the records that use the old label; deletes only touch
the registry so historical records keep their labels.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from .models import IncomeRecord, Registry, Snapshot


def _add(values: Tuple[str, ...], name: str) -> Tuple[str, ...]:
    return values if name in values else values + (name,)


def _rename(values: Tuple[str, ...], old: str, new: str) -> Tuple[str, ...]:
    return tuple(new if value == old else value for value in values)


def _remove(values: Tuple[str, ...], name: str) -> Tuple[str, ...]:
    return tuple(value for value in values if value != name)


def add_category(registry: Registry, name: str) -> Registry:
    return replace(registry, categories=_add(registry.categories, name))


def add_income_category(registry: Registry, name: str) -> Registry:
    return replace(registry, income_categories=_add(registry.income_categories, name))


def add_member(registry: Registry, name: str) -> Registry:
    return replace(registry, members=_add(registry.members, name))


def delete_category(registry: Registry, name: str) -> Registry:
    return replace(registry, categories=_remove(registry.categories, name))


def delete_income_category(registry: Registry, name: str) -> Registry:
    return replace(registry, income_categories=_remove(registry.income_categories, name))


def delete_member(registry: Registry, name: str) -> Registry:
    return replace(registry, members=_remove(registry.members, name))


def rename_category(
    registry: Registry, snapshots: Sequence[Snapshot], old: str, new: str
) -> Tuple[Registry, Tuple[Snapshot, ...]]:
    """Rename an asset category in the registry and in every snapshot item."""

    renamed = tuple(
        replace(
            snapshot,
            items=tuple(
                replace(item, category=new) if item.category == old else item
                for item in snapshot.items
            ),
        )
        for snapshot in snapshots
    )
    return replace(registry, categories=_rename(registry.categories, old, new)), renamed


def rename_income_category(
    registry: Registry, records: Sequence[IncomeRecord], old: str, new: str
) -> Tuple[Registry, Tuple[IncomeRecord, ...]]:
    renamed = tuple(
        replace(record, category=new) if record.category == old else record for record in records
    )
    return (
        replace(registry, income_categories=_rename(registry.income_categories, old, new)),
        renamed,
    )


def rename_member(
    registry: Registry, snapshots: Sequence[Snapshot], old: str, new: str
) -> Tuple[Registry, Tuple[Snapshot, ...]]:
    renamed = tuple(
        replace(snapshot, family_member=new) if snapshot.family_member == old else snapshot
        for snapshot in snapshots
    )
    return replace(registry, members=_rename(registry.members, old, new)), renamed


@dataclass(frozen=True)
class DataSet:
    snapshots: Tuple[Snapshot, ...] = ()
    income: Tuple[IncomeRecord, ...] = ()
    registry: Registry = Registry()


def clear_all() -> DataSet:
    """Return an empty data set with the default registry.

    Callers must have the user confirm before replacing their data with this.
    """

    return DataSet()


__all__ = [
    "DataSet",
    "add_category",
    "add_income_category",
    "add_member",
    "clear_all",
    "delete_category",
    "delete_income_category",
    "delete_member",
    "rename_category",
    "rename_income_category",
    "rename_member",
]
