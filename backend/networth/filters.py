"""Filter selections and the record predicates built from them."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Union

from .models import IncomeRecord, Snapshot

ALL = "All"

SnapshotPredicate = Callable[[Snapshot], bool]
IncomePredicate = Callable[[IncomeRecord], bool]


@dataclass(frozen=True)
class FilterSelection:
    """The member/category/month-range selection driving every view.

    Month bounds are ``YYYY-MM`` strings; ``None`` or an empty string leaves the
    side open.
    """

    family_member: str = ALL
    category: str = ALL
    start_month: Optional[str] = None
    end_month: Optional[str] = None

    @property
    def all_categories(self) -> bool:
        return self.category == ALL

    def without_category(self) -> "FilterSelection":
        return replace(self, category=ALL)

    def matches_category(self, category: str) -> bool:
        return self.all_categories or category == self.category

    def in_range(self, date: object) -> bool:
        """Return whether ``date`` falls inside the month bounds.

        Comparison is on ``YYYY-MM-DD`` strings; non-string dates only pass when
        no bound is set.
        """

        if not self.start_month and not self.end_month:
            return True
        if not isinstance(date, str):
            return False
        if self.start_month and date < f"{self.start_month}-01":
            return False
        if self.end_month and date > f"{self.end_month}-31":
            return False
        return True

    def matches_member(self, member: str) -> bool:
        return self.family_member == ALL or member == self.family_member


def snapshot_predicate(selection: FilterSelection) -> SnapshotPredicate:
    """Build the predicate deciding whether a snapshot is visible."""

    def predicate(snapshot: Snapshot) -> bool:
        if not selection.matches_member(snapshot.family_member):
            return False
        if not selection.in_range(snapshot.date):
            return False
        if selection.all_categories:
            return True
        return any(item.category == selection.category for item in snapshot.items)

    return predicate


def income_predicate(selection: FilterSelection) -> IncomePredicate:
    """Build the predicate deciding whether an income record is visible."""

    def predicate(record: IncomeRecord) -> bool:
        return (
            selection.matches_member(record.family_member)
            and selection.in_range(record.date)
            and selection.matches_category(record.category)
        )

    return predicate


@dataclass(frozen=True)
class FilterOptions:
    members: List[str]
    categories: List[str]
    months: List[str]


def filter_options(records: Iterable[Union[Snapshot, IncomeRecord]]) -> FilterOptions:
    """Derive the selectable members, categories and months from the data.

    Months are returned newest first; members and categories ascending.
    """

    members: set[str] = set()
    categories: set[str] = set()
    months: set[str] = set()
    for record in records:
        if record.family_member:
            members.add(record.family_member)
        if record.date:
            months.add(record.date[:7])
        if isinstance(record, Snapshot):
            categories.update(
                item.category for item in record.items if item.category and item.category.strip()
            )
        elif record.category:
            categories.add(record.category)
    return FilterOptions(
        members=sorted(members),
        categories=sorted(categories),
        months=sorted(months, reverse=True),
    )


__all__ = [
    "ALL",
    "FilterOptions",
    "FilterSelection",
    "filter_options",
    "income_predicate",
    "snapshot_predicate",
]
