"""Bulk import, CSV export and data reset endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from app.core.telemetry import record_import
from app.schemas import (
    AssetImportRequest,
    AssetImportResponse,
    AssetPreviewRequest,
    AssetPreviewResponse,
    ClearRequest,
    DataSetResponse,
    ExportFileSchema,
    ExportRequest,
    ExportResponse,
    ImportRowSchema,
    IncomeImportRequest,
    IncomeImportResponse,
    IncomeRecordSchema,
    RegistrySchema,
    SnapshotSchema,
)
from networth import aggregation, pivot
from networth.bulk_import import parse_asset_rows, parse_income_rows
from networth.export import export_assets_csv, export_filename, export_income_csv
from networth.merge import merge_asset_import, merge_income_import
from networth.registry import clear_all

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/import/assets/preview", response_model=AssetPreviewResponse)
async def preview_asset_import(request: AssetPreviewRequest) -> AssetPreviewResponse:
    """Parse pasted rows for review without touching any snapshot."""

    registry = request.registry.to_domain()
    rows = parse_asset_rows(request.text, registry.categories, registry.members)
    return AssetPreviewResponse(rows=[ImportRowSchema.from_domain(row) for row in rows])


@router.post("/import/assets", response_model=AssetImportResponse)
async def import_assets(request: AssetImportRequest) -> AssetImportResponse:
    """Merge pasted text or reviewed rows into the snapshot collection."""

    registry = request.registry.to_domain()
    if request.rows is not None:
        rows = [row.to_domain() for row in request.rows]
    else:
        rows = parse_asset_rows(request.text or "", registry.categories, registry.members)

    result = merge_asset_import(
        rows,
        [snapshot.to_domain() for snapshot in request.snapshots],
        registry,
    )
    record_import("assets", len(rows), created=result.created, updated=result.updated)
    return AssetImportResponse(
        snapshots=[SnapshotSchema.from_domain(snapshot) for snapshot in result.snapshots],
        registry=RegistrySchema.from_domain(result.registry),
        imported_rows=len(rows),
        created=result.created,
        updated=result.updated,
    )


@router.post("/import/income", response_model=IncomeImportResponse)
async def import_income(request: IncomeImportRequest) -> IncomeImportResponse:
    """Append pasted or reviewed income records, skipping ones already present."""

    registry = request.registry.to_domain()
    if request.records is not None:
        records = [record.to_domain() for record in request.records]
    else:
        records = parse_income_rows(request.text or "", registry.members)

    result = merge_income_import(
        records,
        [record.to_domain() for record in request.income],
        registry,
    )
    record_import("income", result.added)
    return IncomeImportResponse(
        income=[IncomeRecordSchema.from_domain(record) for record in result.records],
        registry=RegistrySchema.from_domain(result.registry),
        added=result.added,
        skipped=result.skipped,
    )


@router.post("/export", response_model=ExportResponse)
async def export_csv(request: ExportRequest) -> ExportResponse:
    """Render each non-empty collection as CSV text."""

    response = ExportResponse()
    if request.snapshots:
        response.assets = ExportFileSchema(
            filename=export_filename("assets"),
            content=export_assets_csv([snapshot.to_domain() for snapshot in request.snapshots]),
        )
    if request.income:
        response.income = ExportFileSchema(
            filename=export_filename("income"),
            content=export_income_csv([record.to_domain() for record in request.income]),
        )
    return response


@router.post("/data/clear", response_model=DataSetResponse)
async def clear_data(request: ClearRequest) -> DataSetResponse:
    """Return an empty data set; refused unless the caller confirmed."""

    if not request.confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Clearing all data must be explicitly confirmed.",
        )
    aggregation.clear_caches()
    pivot.clear_caches()
    logger.info("All data cleared on request")
    data = clear_all()
    return DataSetResponse(
        snapshots=list(data.snapshots),
        income=list(data.income),
        registry=RegistrySchema.from_domain(data.registry),
    )


__all__ = ["router"]
