"""AI commentary, stock valuation and income summary endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from app.api.dependencies.engine import get_app_settings, get_commentary_service, get_normalizer
from app.config import AppSettings
from app.schemas import (
    CommentaryRequest,
    CommentaryResponse,
    IncomeMonthSchema,
    IncomeSummaryRequest,
    IncomeSummaryResponse,
    PositionValuationSchema,
    SnapshotSummarySchema,
    StockValuationRequest,
    StockValuationResponse,
)
from networth.commentary import CommentaryService, build_commentary_summary
from networth.fx import CurrencyNormalizer
from networth.income import summarize_income
from networth.stocks import value_positions

router = APIRouter()


@router.post("/commentary", response_model=CommentaryResponse)
async def commentary(
    request: CommentaryRequest,
    normalizer: CurrencyNormalizer = Depends(get_normalizer),
    settings: AppSettings = Depends(get_app_settings),
    service: CommentaryService = Depends(get_commentary_service),
) -> CommentaryResponse:
    """Summarize the recent snapshots and ask the commentary service about them."""

    selection = request.selection.to_domain()
    summary = build_commentary_summary(
        [snapshot.to_domain() for snapshot in request.snapshots],
        selection,
        normalizer,
        limit=settings.commentary_snapshot_limit,
    )
    focus = None if selection.all_categories else selection.category
    analysis = await run_in_threadpool(service.analyze, summary, focus)
    return CommentaryResponse(
        summary=[SnapshotSummarySchema(**entry.as_dict()) for entry in summary],
        analysis=analysis,
    )


@router.post("/stocks/valuation", response_model=StockValuationResponse)
async def stock_valuation(
    request: StockValuationRequest,
    normalizer: CurrencyNormalizer = Depends(get_normalizer),
) -> StockValuationResponse:
    summary = value_positions([position.to_domain() for position in request.positions], normalizer)
    return StockValuationResponse(
        positions=[
            PositionValuationSchema(
                ticker=p.ticker,
                cost_basis=p.cost_basis,
                market_value=p.market_value,
                gain=p.gain,
                return_pct=p.return_pct,
            )
            for p in summary.positions
        ],
        total_cost=summary.total_cost,
        total_market_value=summary.total_market_value,
        total_gain=summary.total_gain,
        total_return_pct=summary.total_return_pct,
    )


@router.post("/income/summary", response_model=IncomeSummaryResponse)
async def income_summary(
    request: IncomeSummaryRequest,
    normalizer: CurrencyNormalizer = Depends(get_normalizer),
) -> IncomeSummaryResponse:
    summary = summarize_income(
        [record.to_domain() for record in request.income],
        request.year,
        normalizer=normalizer,
    )
    return IncomeSummaryResponse(
        months=[IncomeMonthSchema(month=m.month, by_category=m.by_category) for m in summary.months],
        by_category=list(summary.by_category),
        total=summary.total,
        ytd=summary.ytd,
        monthly_average=summary.monthly_average,
        years=list(summary.years),
    )


__all__ = ["router"]
