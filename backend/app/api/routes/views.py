"""Chart and table views over caller-supplied collections."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies.engine import get_app_settings, get_normalizer
from app.config import AppSettings
from app.core.telemetry import engine_span
from app.schemas import (
    BreakdownEntrySchema,
    BreakdownResponse,
    DataRequest,
    FilterOptionsResponse,
    PivotResponse,
    TimeSeriesResponse,
)
from networth.aggregation import (
    BreakdownEntry,
    income_time_series,
    latest_breakdown,
    series_keys,
    snapshot_time_series,
)
from networth.filters import filter_options
from networth.fx import CurrencyNormalizer
from networth.pivot import build_asset_pivot, build_income_pivot

router = APIRouter()


def _entries(entries: tuple[BreakdownEntry, ...]) -> list[BreakdownEntrySchema]:
    return [
        BreakdownEntrySchema(name=e.name, value=e.value, original_value=e.original_value)
        for e in entries
    ]


@router.post("/timeseries", response_model=TimeSeriesResponse)
async def time_series(
    request: DataRequest,
    normalizer: CurrencyNormalizer = Depends(get_normalizer),
) -> TimeSeriesResponse:
    """Return per-date normalized sums keyed by category (or item name when drilled in)."""

    selection = request.selection.to_domain()
    with engine_span("timeseries", source=request.source):
        if request.source == "income":
            points = income_time_series(
                [record.to_domain() for record in request.income], selection, normalizer
            )
        else:
            points = snapshot_time_series(
                [snapshot.to_domain() for snapshot in request.snapshots], selection, normalizer
            )
    return TimeSeriesResponse(points=[point.as_dict() for point in points], keys=series_keys(points))


@router.post("/breakdown", response_model=BreakdownResponse)
async def breakdown(
    request: DataRequest,
    normalizer: CurrencyNormalizer = Depends(get_normalizer),
    settings: AppSettings = Depends(get_app_settings),
) -> BreakdownResponse:
    """Return asset and liability slices for the latest visible date."""

    with engine_span("breakdown", snapshots=len(request.snapshots)):
        result = latest_breakdown(
            [snapshot.to_domain() for snapshot in request.snapshots],
            request.selection.to_domain(),
            normalizer,
            top_n=settings.breakdown_top_n,
        )
    return BreakdownResponse(
        date=result.date,
        assets=_entries(result.assets),
        liabilities=_entries(result.liabilities),
        net=result.net,
    )


@router.post("/pivot", response_model=PivotResponse)
async def pivot(
    request: DataRequest,
    normalizer: CurrencyNormalizer = Depends(get_normalizer),
) -> PivotResponse:
    """Return the date x holding matrix; empty cells are ``null``."""

    selection = request.selection.to_domain()
    with engine_span("pivot", source=request.source):
        if request.source == "income":
            table = build_income_pivot(
                [record.to_domain() for record in request.income], selection, normalizer
            )
        else:
            table = build_asset_pivot(
                [snapshot.to_domain() for snapshot in request.snapshots], selection, normalizer
            )
    return PivotResponse(**table.as_dict())


@router.post("/options", response_model=FilterOptionsResponse)
async def options(request: DataRequest) -> FilterOptionsResponse:
    """List the members, categories and months present in the chosen collection."""

    if request.source == "income":
        found = filter_options(record.to_domain() for record in request.income)
    else:
        found = filter_options(snapshot.to_domain() for snapshot in request.snapshots)
    return FilterOptionsResponse(members=found.members, categories=found.categories, months=found.months)


__all__ = ["router"]
