"""Pydantic schemas for snapshots, income records and registries."""

from __future__ import annotations

from dataclasses import asdict

from pydantic import BaseModel, Field

from networth.filters import ALL, FilterSelection
from networth.models import (
    DEFAULT_CATEGORIES,
    DEFAULT_INCOME_CATEGORIES,
    DEFAULT_MEMBERS,
    AssetItem,
    ImportRow,
    IncomeRecord,
    Registry,
    Snapshot,
    StockPosition,
    new_id,
    raw_total,
)


class AssetItemSchema(BaseModel):
    id: str | None = None
    category: str = ""
    name: str = ""
    value: float
    currency: str = "USD"
    tags: list[str] = Field(default_factory=list)

    def to_domain(self) -> AssetItem:
        return AssetItem(
            id=self.id or new_id(),
            category=self.category,
            name=self.name,
            value=self.value,
            currency=self.currency,
            tags=tuple(self.tags),
        )

    @classmethod
    def from_domain(cls, item: AssetItem) -> "AssetItemSchema":
        return cls(
            id=item.id,
            category=item.category,
            name=item.name,
            value=item.value,
            currency=item.currency,
            tags=list(item.tags),
        )


class SnapshotSchema(BaseModel):
    id: str | None = None
    date: str = Field(..., examples=["2024-01-01"])
    family_member: str = Field(default="Me")
    items: list[AssetItemSchema] = Field(default_factory=list)
    note: str | None = None
    total_value: float | None = Field(
        default=None,
        description="Raw unconverted sum of item values; derived when omitted.",
    )

    def to_domain(self) -> Snapshot:
        items = tuple(item.to_domain() for item in self.items)
        return Snapshot(
            id=self.id or new_id(),
            date=self.date,
            family_member=self.family_member,
            items=items,
            total_value=raw_total(items) if self.total_value is None else self.total_value,
            note=self.note,
        )

    @classmethod
    def from_domain(cls, snapshot: Snapshot) -> "SnapshotSchema":
        return cls(
            id=snapshot.id,
            date=snapshot.date,
            family_member=snapshot.family_member,
            items=[AssetItemSchema.from_domain(item) for item in snapshot.items],
            note=snapshot.note,
            total_value=snapshot.total_value,
        )


class IncomeRecordSchema(BaseModel):
    id: str | None = None
    date: str = Field(..., examples=["2024-03-31"])
    category: str = ""
    name: str = ""
    value: float
    currency: str = "USD"
    family_member: str = "Me"

    def to_domain(self) -> IncomeRecord:
        return IncomeRecord(
            id=self.id or new_id(),
            date=self.date,
            category=self.category,
            name=self.name,
            value=self.value,
            currency=self.currency,
            family_member=self.family_member,
        )

    @classmethod
    def from_domain(cls, record: IncomeRecord) -> "IncomeRecordSchema":
        return cls(
            id=record.id,
            date=record.date,
            category=record.category,
            name=record.name,
            value=record.value,
            currency=record.currency,
            family_member=record.family_member,
        )


class ImportRowSchema(BaseModel):
    id: str | None = None
    date: str
    category: str
    name: str
    value: float
    family_member: str
    currency: str = "USD"

    def to_domain(self) -> ImportRow:
        return ImportRow(
            id=self.id or new_id(),
            date=self.date,
            category=self.category,
            name=self.name,
            value=self.value,
            family_member=self.family_member,
            currency=self.currency,
        )

    @classmethod
    def from_domain(cls, row: ImportRow) -> "ImportRowSchema":
        return cls(**asdict(row))


class StockPositionSchema(BaseModel):
    id: str | None = None
    ticker: str = Field(..., examples=["AAPL"])
    quantity: float
    avg_cost: float
    current_price: float | None = Field(default=None, description="Defaults to the average cost.")
    currency: str = "USD"

    def to_domain(self) -> StockPosition:
        return StockPosition(
            id=self.id or new_id(),
            ticker=self.ticker.upper(),
            quantity=self.quantity,
            avg_cost=self.avg_cost,
            current_price=self.avg_cost if self.current_price is None else self.current_price,
            currency=self.currency,
        )


class RegistrySchema(BaseModel):
    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    income_categories: list[str] = Field(default_factory=lambda: list(DEFAULT_INCOME_CATEGORIES))
    members: list[str] = Field(default_factory=lambda: list(DEFAULT_MEMBERS))

    def to_domain(self) -> Registry:
        return Registry(
            categories=tuple(self.categories),
            income_categories=tuple(self.income_categories),
            members=tuple(self.members),
        )

    @classmethod
    def from_domain(cls, registry: Registry) -> "RegistrySchema":
        return cls(
            categories=list(registry.categories),
            income_categories=list(registry.income_categories),
            members=list(registry.members),
        )


class FilterSchema(BaseModel):
    family_member: str = ALL
    category: str = ALL
    start_month: str | None = Field(default=None, examples=["2024-01"])
    end_month: str | None = Field(default=None, examples=["2024-12"])

    def to_domain(self) -> FilterSelection:
        return FilterSelection(
            family_member=self.family_member,
            category=self.category,
            start_month=self.start_month or None,
            end_month=self.end_month or None,
        )


__all__ = [
    "AssetItemSchema",
    "FilterSchema",
    "ImportRowSchema",
    "IncomeRecordSchema",
    "RegistrySchema",
    "SnapshotSchema",
    "StockPositionSchema",
]
