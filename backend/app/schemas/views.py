"""Request and response schemas for the aggregation, import and insight endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .records import (
    FilterSchema,
    ImportRowSchema,
    IncomeRecordSchema,
    RegistrySchema,
    SnapshotSchema,
    StockPositionSchema,
)

DataSource = Literal["assets", "income"]


class DataRequest(BaseModel):
    """Collections the caller owns; the service never stores them."""

    source: DataSource = "assets"
    snapshots: list[SnapshotSchema] = Field(default_factory=list)
    income: list[IncomeRecordSchema] = Field(default_factory=list)
    selection: FilterSchema = Field(default_factory=FilterSchema)


class SeriesPointSchema(BaseModel):
    date: str
    values: dict[str, float]
    total: float


class TimeSeriesResponse(BaseModel):
    points: list[SeriesPointSchema]
    keys: list[str]


class BreakdownEntrySchema(BaseModel):
    name: str
    value: float
    original_value: float


class BreakdownResponse(BaseModel):
    date: str | None
    assets: list[BreakdownEntrySchema]
    liabilities: list[BreakdownEntrySchema]
    net: float


class PivotRowSchema(BaseModel):
    date: str
    values: dict[str, float | None]
    total: float


class PivotResponse(BaseModel):
    columns: list[str]
    rows: list[PivotRowSchema]
    column_totals: dict[str, float | None]
    grand_total: float


class FilterOptionsResponse(BaseModel):
    members: list[str]
    categories: list[str]
    months: list[str]


class AssetPreviewRequest(BaseModel):
    text: str
    registry: RegistrySchema = Field(default_factory=RegistrySchema)


class AssetPreviewResponse(BaseModel):
    rows: list[ImportRowSchema]


class AssetImportRequest(BaseModel):
    """Either raw ``text`` to parse or already reviewed ``rows``."""

    text: str | None = None
    rows: list[ImportRowSchema] | None = None
    snapshots: list[SnapshotSchema] = Field(default_factory=list)
    registry: RegistrySchema = Field(default_factory=RegistrySchema)


class AssetImportResponse(BaseModel):
    snapshots: list[SnapshotSchema]
    registry: RegistrySchema
    imported_rows: int
    created: int
    updated: int


class IncomeImportRequest(BaseModel):
    text: str | None = None
    records: list[IncomeRecordSchema] | None = None
    income: list[IncomeRecordSchema] = Field(default_factory=list)
    registry: RegistrySchema = Field(default_factory=RegistrySchema)


class IncomeImportResponse(BaseModel):
    income: list[IncomeRecordSchema]
    registry: RegistrySchema
    added: int
    skipped: int


class ExportRequest(BaseModel):
    snapshots: list[SnapshotSchema] = Field(default_factory=list)
    income: list[IncomeRecordSchema] = Field(default_factory=list)


class ExportFileSchema(BaseModel):
    filename: str
    content: str


class ExportResponse(BaseModel):
    assets: ExportFileSchema | None = None
    income: ExportFileSchema | None = None


class ClearRequest(BaseModel):
    confirm: bool = False


class DataSetResponse(BaseModel):
    snapshots: list[SnapshotSchema]
    income: list[IncomeRecordSchema]
    registry: RegistrySchema


class CommentaryRequest(BaseModel):
    snapshots: list[SnapshotSchema] = Field(default_factory=list)
    selection: FilterSchema = Field(default_factory=FilterSchema)


class SnapshotSummarySchema(BaseModel):
    date: str
    total: float
    breakdown: list[str]


class CommentaryResponse(BaseModel):
    summary: list[SnapshotSummarySchema]
    analysis: str


class StockValuationRequest(BaseModel):
    positions: list[StockPositionSchema] = Field(default_factory=list)


class PositionValuationSchema(BaseModel):
    ticker: str
    cost_basis: float
    market_value: float
    gain: float
    return_pct: float


class StockValuationResponse(BaseModel):
    positions: list[PositionValuationSchema]
    total_cost: float
    total_market_value: float
    total_gain: float
    total_return_pct: float


class IncomeSummaryRequest(BaseModel):
    income: list[IncomeRecordSchema] = Field(default_factory=list)
    year: str = "All"


class IncomeMonthSchema(BaseModel):
    month: str
    by_category: dict[str, float]


class IncomeSummaryResponse(BaseModel):
    months: list[IncomeMonthSchema]
    by_category: list[tuple[str, float]]
    total: float
    ytd: float
    monthly_average: float
    years: list[str]


__all__ = [
    "AssetImportRequest",
    "AssetImportResponse",
    "AssetPreviewRequest",
    "AssetPreviewResponse",
    "BreakdownEntrySchema",
    "BreakdownResponse",
    "ClearRequest",
    "CommentaryRequest",
    "CommentaryResponse",
    "DataRequest",
    "DataSetResponse",
    "ExportFileSchema",
    "ExportRequest",
    "ExportResponse",
    "FilterOptionsResponse",
    "IncomeImportRequest",
    "IncomeImportResponse",
    "IncomeMonthSchema",
    "IncomeSummaryRequest",
    "IncomeSummaryResponse",
    "PivotResponse",
    "PivotRowSchema",
    "PositionValuationSchema",
    "SeriesPointSchema",
    "SnapshotSummarySchema",
    "StockValuationRequest",
    "StockValuationResponse",
    "TimeSeriesResponse",
]
