"""Pydantic schema exports."""

from .records import (
    AssetItemSchema,
    FilterSchema,
    ImportRowSchema,
    IncomeRecordSchema,
    RegistrySchema,
    SnapshotSchema,
    StockPositionSchema,
)
from .views import (
    AssetImportRequest,
    AssetImportResponse,
    AssetPreviewRequest,
    AssetPreviewResponse,
    BreakdownEntrySchema,
    BreakdownResponse,
    ClearRequest,
    CommentaryRequest,
    CommentaryResponse,
    DataRequest,
    DataSetResponse,
    ExportFileSchema,
    ExportRequest,
    ExportResponse,
    FilterOptionsResponse,
    IncomeImportRequest,
    IncomeImportResponse,
    IncomeMonthSchema,
    IncomeSummaryRequest,
    IncomeSummaryResponse,
    PivotResponse,
    PivotRowSchema,
    PositionValuationSchema,
    SeriesPointSchema,
    SnapshotSummarySchema,
    StockValuationRequest,
    StockValuationResponse,
    TimeSeriesResponse,
)

__all__ = [
    "AssetImportRequest",
    "AssetImportResponse",
    "AssetItemSchema",
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
    "FilterSchema",
    "ImportRowSchema",
    "IncomeImportRequest",
    "IncomeImportResponse",
    "IncomeMonthSchema",
    "IncomeRecordSchema",
    "IncomeSummaryRequest",
    "IncomeSummaryResponse",
    "PivotResponse",
    "PivotRowSchema",
    "PositionValuationSchema",
    "SeriesPointSchema",
    "RegistrySchema",
    "SnapshotSchema",
    "SnapshotSummarySchema",
    "StockPositionSchema",
    "StockValuationRequest",
    "StockValuationResponse",
    "TimeSeriesResponse",
]
