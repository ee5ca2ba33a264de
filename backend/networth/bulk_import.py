"""Bulk text import parsing.

Rows are ``Date | Category | Name | Value | FamilyMember | Currency`` separated
by a tab (when the line contains one) or a comma. Parsing never fails: a bad
date becomes today's date and a row without a usable value is left out.
"""
from __future__ import annotations

import logging
import re
import warnings
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Generic, List, Optional, Sequence, TypeVar

import pandas as pd

from .models import ImportRow, IncomeRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_COLUMNS = 3
DEFAULT_CURRENCY = "USD"
DEFAULT_MEMBER = "Me"
DEFAULT_ASSET_CATEGORY = "Other"
DEFAULT_INCOME_CATEGORY = "Income"
DEFAULT_INCOME_NAME = "Source"

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_FLOAT = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")


@dataclass(frozen=True)
class ParsedField(Generic[T]):
    """A parsed cell, flagged when the silent fallback was used."""

    value: T
    fallback: bool = False


def _today_iso(today: date | None) -> str:
    if today is None:
        today = datetime.now(timezone.utc).date()
    return today.isoformat()


def parse_date(raw: str, today: date | None = None) -> ParsedField[str]:
    """Parse ``raw`` as a calendar date, falling back to today."""

    if raw:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            try:
                stamp = pd.to_datetime(raw, errors="coerce")
            except (TypeError, ValueError, OverflowError):
                stamp = pd.NaT
        if not pd.isna(stamp):
            if stamp.tzinfo is not None:
                stamp = stamp.tz_convert("UTC")
            return ParsedField(stamp.strftime("%Y-%m-%d"))
    return ParsedField(_today_iso(today), fallback=True)


def parse_value(raw: str) -> ParsedField[Optional[float]]:
    """Parse a money cell the way a lenient spreadsheet paste expects.

    Everything except digits, ``.`` and ``-`` is stripped and the longest
    leading number is used, so ``"$1,200.50"`` reads as ``1200.5``. A blank cell
    reads as zero. ``value`` is ``None`` when no number can be read.
    """

    if not raw:
        return ParsedField(0.0, fallback=True)
    match = _LEADING_FLOAT.match(_NON_NUMERIC.sub("", raw))
    if match is None:
        return ParsedField(None, fallback=True)
    return ParsedField(float(match.group(0)))


def _split_lines(text: str) -> List[List[str]]:
    rows: List[List[str]] = []
    for line in text.strip().split("\n"):
        delimiter = "\t" if "\t" in line else ","
        cells = [cell.strip() for cell in line.split(delimiter)]
        if len(cells) < MIN_COLUMNS:
            continue
        rows.append(cells)
    return rows


def _cell(cells: Sequence[str], index: int) -> str:
    return cells[index] if index < len(cells) else ""


def _canonical_category(category: str, known: Sequence[str]) -> str:
    lowered = category.lower()
    for candidate in known:
        if candidate.lower() == lowered:
            return candidate
    return category


def _parse_rows(
    text: str,
    *,
    default_category: str,
    default_name: str | None,
    categories: Sequence[str],
    members: Sequence[str],
    today: date | None,
) -> List[ImportRow]:
    default_member = members[0] if members else DEFAULT_MEMBER
    parsed: List[ImportRow] = []
    dropped = 0
    date_fallbacks = 0
    for cells in _split_lines(text):
        value = parse_value(_cell(cells, 3))
        if value.value is None:
            dropped += 1
            continue
        row_date = parse_date(cells[0], today)
        if row_date.fallback:
            date_fallbacks += 1
        category = cells[1] or default_category
        parsed.append(
            ImportRow(
                date=row_date.value,
                category=_canonical_category(category, categories),
                name=cells[2] or default_name or category,
                value=value.value,
                family_member=_cell(cells, 4) or default_member,
                currency=_cell(cells, 5) or DEFAULT_CURRENCY,
            )
        )
    if dropped or date_fallbacks:
        logger.debug(
            "Bulk parse kept %d rows, dropped %d without a value, defaulted %d dates",
            len(parsed),
            dropped,
            date_fallbacks,
        )
    return parsed


def parse_asset_rows(
    text: str,
    categories: Sequence[str] = (),
    members: Sequence[str] = (),
    *,
    today: date | None = None,
) -> List[ImportRow]:
    """Parse pasted asset rows into staged import rows."""

    return _parse_rows(
        text,
        default_category=DEFAULT_ASSET_CATEGORY,
        default_name=None,
        categories=categories,
        members=members,
        today=today,
    )


def parse_income_rows(
    text: str,
    members: Sequence[str] = (),
    *,
    today: date | None = None,
) -> List[IncomeRecord]:
    """Parse pasted income rows. Income categories keep the casing as typed."""

    rows = _parse_rows(
        text,
        default_category=DEFAULT_INCOME_CATEGORY,
        default_name=DEFAULT_INCOME_NAME,
        categories=(),
        members=members,
        today=today,
    )
    return [row.to_income_record() for row in rows]


__all__ = [
    "ParsedField",
    "parse_asset_rows",
    "parse_date",
    "parse_income_rows",
    "parse_value",
]
