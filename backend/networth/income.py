"""Investment income summaries by month and category."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, List, Sequence, Tuple

from .filters import ALL
from .fx import DEFAULT_NORMALIZER, CurrencyNormalizer
from .models import IncomeRecord


@dataclass(frozen=True)
class MonthBucket:
    month: str
    by_category: Dict[str, float]


@dataclass(frozen=True)
class IncomeSummary:
    months: Tuple[MonthBucket, ...]
    by_category: Tuple[Tuple[str, float], ...]
    total: float
    ytd: float
    monthly_average: float
    years: Tuple[str, ...]


def summarize_income(
    records: Sequence[IncomeRecord],
    year: str = ALL,
    *,
    today: date | None = None,
    normalizer: CurrencyNormalizer | None = None,
) -> IncomeSummary:
    """Bucket income by month and category for the selected year.

    ``ytd`` counts records in the calendar year of ``today``; the monthly
    average divides by the number of months that actually have income.
    """

    normalizer = normalizer or DEFAULT_NORMALIZER
    current_year = str((today or datetime.now(timezone.utc).date()).year)
    years = {record.date[:4] for record in records}

    months: Dict[str, Dict[str, float]] = {}
    categories: Dict[str, float] = {}
    total = 0.0
    ytd = 0.0
    for record in records:
        record_year = record.date[:4]
        if year != ALL and record_year != year:
            continue
        amount = normalizer.normalize(record.value, record.currency)
        total += amount
        if record_year == current_year:
            ytd += amount
        bucket = months.setdefault(record.date[:7], {})
        bucket[record.category] = bucket.get(record.category, 0.0) + amount
        categories[record.category] = categories.get(record.category, 0.0) + amount

    ordered_months: List[str] = sorted(months)
    return IncomeSummary(
        months=tuple(MonthBucket(month, months[month]) for month in ordered_months),
        by_category=tuple(sorted(categories.items(), key=lambda pair: pair[1], reverse=True)),
        total=total,
        ytd=ytd,
        monthly_average=total / (len(ordered_months) or 1),
        years=tuple(sorted(years, reverse=True)),
    )


__all__ = ["IncomeSummary", "MonthBucket", "summarize_income"]
