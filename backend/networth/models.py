"""Domain models used by the net-worth aggregation engine."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Bank",
    "Stock",
    "Real Estate",
    "Crypto",
    "Bond",
    "Loan",
    "Vehicle",
    "Cash",
    "Other",
)
DEFAULT_INCOME_CATEGORIES: Tuple[str, ...] = (
    "Dividend",
    "Interest",
    "Rent",
    "Salary",
    "Bonus",
    "Capital Gains",
    "Other",
)
DEFAULT_MEMBERS: Tuple[str, ...] = ("Me",)


def new_id() -> str:
    """Return a fresh unique record identifier."""

    return str(uuid.uuid4())


@dataclass(frozen=True)
class AssetItem:
    """A single holding inside a snapshot. Negative values are liabilities."""

    category: str
    name: str
    value: float
    currency: str = "USD"
    tags: Tuple[str, ...] = ()
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))


@dataclass(frozen=True)
class Snapshot:
    """A dated bundle of holdings for one family member.

    ``total_value`` is the raw, unconverted sum of the item values. Callers that
    need a currency-normalized figure must go through the aggregators.
    """

    date: str
    family_member: str
    items: Tuple[AssetItem, ...] = ()
    total_value: float = 0.0
    note: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def build(
        cls,
        date: str,
        family_member: str,
        items: Tuple[AssetItem, ...] | list[AssetItem],
        *,
        note: Optional[str] = None,
        id: Optional[str] = None,
    ) -> "Snapshot":
        """Create a snapshot whose ``total_value`` is derived from ``items``."""

        items = tuple(items)
        return cls(
            id=id or new_id(),
            date=date,
            family_member=family_member,
            items=items,
            total_value=raw_total(items),
            note=note,
        )


@dataclass(frozen=True)
class IncomeRecord:
    """An investment-income event (dividend, interest, rent, ...)."""

    date: str
    category: str
    name: str
    value: float
    currency: str = "USD"
    family_member: str = "Me"
    id: str = field(default_factory=new_id)

    def signature(self) -> Tuple[str, str, str, float]:
        """Return the identity used to skip duplicate income imports."""

        return (self.date, self.category, self.name, self.value)


@dataclass(frozen=True)
class StockPosition:
    """A brokerage position valued by the stock view."""

    ticker: str
    quantity: float
    avg_cost: float
    current_price: float
    currency: str = "USD"
    id: str = field(default_factory=new_id)


@dataclass(frozen=True)
class ImportRow:
    """A staged bulk-import row awaiting review and merge."""

    date: str
    category: str
    name: str
    value: float
    family_member: str
    currency: str
    id: str = field(default_factory=new_id)

    def to_income_record(self) -> IncomeRecord:
        return IncomeRecord(
            id=self.id,
            date=self.date,
            category=self.category,
            name=self.name,
            value=self.value,
            currency=self.currency,
            family_member=self.family_member,
        )


@dataclass(frozen=True)
class Registry:
    """Known categories and family members.

    Registries only grow through imports; entries are unique by value and keep
    their insertion order.
    """

    categories: Tuple[str, ...] = DEFAULT_CATEGORIES
    income_categories: Tuple[str, ...] = DEFAULT_INCOME_CATEGORIES
    members: Tuple[str, ...] = DEFAULT_MEMBERS


def raw_total(items: Tuple[AssetItem, ...] | list[AssetItem]) -> float:
    """Return the unconverted sum of the item values."""

    return sum((item.value for item in items), 0.0)
