"""CSV export of snapshots and income records.

Free-text fields have their commas replaced by spaces instead of being quoted,
so every exported line splits into exactly six columns and can be pasted back
into the bulk importer.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Iterable, List, Sequence

from .models import IncomeRecord, Snapshot

CSV_HEADER = ("Date", "Category", "Name", "Value", "Family Member", "Currency")


def _clean(text: str | None) -> str:
    return (text or "").replace(",", " ")


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""

    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def _join(lines: Iterable[Sequence[str]]) -> str:
    return "\n".join(",".join(cells) for cells in lines)


def export_assets_csv(snapshots: Sequence[Snapshot]) -> str:
    """Flatten every asset item of every snapshot into one CSV line."""

    lines: List[Sequence[str]] = [CSV_HEADER]
    for snapshot in snapshots:
        member = _clean(snapshot.family_member or "Me")
        for item in snapshot.items:
            lines.append(
                (
                    snapshot.date,
                    _clean(item.category),
                    _clean(item.name),
                    format_number(item.value),
                    member,
                    item.currency or "USD",
                )
            )
    return _join(lines)


def export_income_csv(records: Sequence[IncomeRecord]) -> str:
    lines: List[Sequence[str]] = [CSV_HEADER]
    for record in records:
        lines.append(
            (
                record.date,
                _clean(record.category),
                _clean(record.name),
                format_number(record.value),
                _clean(record.family_member or "Me"),
                record.currency or "USD",
            )
        )
    return _join(lines)


def export_filename(kind: str, today: date | None = None) -> str:
    """Return the download name for ``kind`` (``"assets"`` or ``"income"``)."""

    today = today or datetime.now(timezone.utc).date()
    prefix = "Asset_Snapshot" if kind == "assets" else "Investment_Income"
    return f"{prefix}_{today.isoformat()}.csv"


__all__ = [
    "CSV_HEADER",
    "export_assets_csv",
    "export_filename",
    "export_income_csv",
    "format_number",
]
