"""Valuation of brokerage positions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .fx import DEFAULT_NORMALIZER, CurrencyNormalizer
from .models import StockPosition


@dataclass(frozen=True)
class PositionValuation:
    ticker: str
    cost_basis: float
    market_value: float
    gain: float
    return_pct: float


@dataclass(frozen=True)
class StockSummary:
    positions: Tuple[PositionValuation, ...]
    total_cost: float
    total_market_value: float
    total_gain: float
    total_return_pct: float


def _return_pct(gain: float, cost: float) -> float:
    return gain / cost * 100 if cost > 0 else 0.0


def value_positions(
    positions: Sequence[StockPosition],
    normalizer: CurrencyNormalizer | None = None,
) -> StockSummary:
    """Value each position at its current price in the reference unit."""

    normalizer = normalizer or DEFAULT_NORMALIZER
    valuations = []
    for position in positions:
        cost = normalizer.normalize(position.avg_cost * position.quantity, position.currency)
        market = normalizer.normalize(position.current_price * position.quantity, position.currency)
        valuations.append(
            PositionValuation(
                ticker=position.ticker,
                cost_basis=cost,
                market_value=market,
                gain=market - cost,
                return_pct=_return_pct(market - cost, cost),
            )
        )
    total_cost = sum(v.cost_basis for v in valuations)
    total_market = sum(v.market_value for v in valuations)
    return StockSummary(
        positions=tuple(valuations),
        total_cost=total_cost,
        total_market_value=total_market,
        total_gain=total_market - total_cost,
        total_return_pct=_return_pct(total_market - total_cost, total_cost),
    )


__all__ = ["PositionValuation", "StockSummary", "value_positions"]
