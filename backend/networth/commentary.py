"""Summaries handed to the AI commentary service, and the service call itself."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from openai import OpenAI

from .aggregation import date_sort_key
from .export import format_number
from .filters import FilterSelection, snapshot_predicate
from .fx import DEFAULT_NORMALIZER, CurrencyNormalizer
from .models import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_LIMIT = 10
MISSING_KEY_MESSAGE = "API Key is missing. Please check your environment configuration."
FAILURE_MESSAGE = "Failed to generate financial insights. Please try again later."
EMPTY_MESSAGE = "No analysis generated."

SYSTEM_PROMPT = "You are a helpful financial assistant. Output valid Markdown."


@dataclass(frozen=True)
class SnapshotSummary:
    date: str
    total: float
    breakdown: List[str]

    def as_dict(self) -> dict[str, Any]:
        return {"date": self.date, "total": self.total, "breakdown": list(self.breakdown)}


def build_commentary_summary(
    snapshots: Sequence[Snapshot],
    selection: FilterSelection | None = None,
    normalizer: CurrencyNormalizer | None = None,
    *,
    limit: int = DEFAULT_SNAPSHOT_LIMIT,
) -> List[SnapshotSummary]:
    """Condense the most recent visible snapshots for the commentary prompt.

    ``total`` is the normalized sum of the whole snapshot. With a category
    selected, ``breakdown`` lists only items in that category or whose name
    contains it.
    """

    selection = selection or FilterSelection()
    normalizer = normalizer or DEFAULT_NORMALIZER
    predicate = snapshot_predicate(selection.without_category())
    visible = sorted(
        (snapshot for snapshot in snapshots if predicate(snapshot)),
        key=lambda snapshot: date_sort_key(snapshot.date),
    )
    focus = None if selection.all_categories else selection.category

    summaries: List[SnapshotSummary] = []
    for snapshot in visible[-limit:] if limit > 0 else []:
        breakdown = [
            f"{item.category}-{item.name}: "
            f"{format_number(normalizer.normalize(item.value, item.currency))}"
            for item in snapshot.items
            if focus is None or item.category == focus or focus in item.name
        ]
        total = sum(normalizer.normalize(item.value, item.currency) for item in snapshot.items)
        summaries.append(SnapshotSummary(date=snapshot.date, total=total, breakdown=breakdown))
    return summaries


def build_prompt(summary: Sequence[SnapshotSummary], focus: Optional[str] = None) -> str:
    context = (
        f'Focus specifically on the asset category or tag: "{focus}".'
        if focus
        else "Provide a holistic overview of the total net worth and asset allocation."
    )
    data = json.dumps([entry.as_dict() for entry in summary], indent=2, ensure_ascii=False)
    return (
        "You are an expert personal financial analyst.\n"
        "Analyze the following asset history data (snapshots over time).\n"
        f"{context}\n\n"
        f"Data:\n{data}\n\n"
        "Please provide:\n"
        "1. A brief trend analysis (Growth rate, volatility).\n"
        "2. Observations on asset allocation (if visible).\n"
        "3. Constructive feedback or potential risks (e.g., lack of diversification if obvious).\n\n"
        "Keep the tone professional, encouraging, and concise. Use Markdown formatting."
    )


class CommentaryService:
    """Turn a snapshot summary into Markdown commentary.

    Failures never propagate: callers always get displayable text back.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4.1-mini",
        *,
        client: Any | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def analyze(self, summary: Sequence[SnapshotSummary], focus: Optional[str] = None) -> str:
        if not self.api_key and self._client is None:
            return MISSING_KEY_MESSAGE

        prompt = build_prompt(summary, focus)
        logger.info("Commentary request for %d snapshots (focus=%s)", len(summary), focus)
        try:
            response = self._get_client().responses.create(
                model=self.model,
                instructions=SYSTEM_PROMPT,
                input=prompt,
            )
        except Exception as exc:
            logger.exception("Commentary call failed: %s", exc)
            return FAILURE_MESSAGE
        return getattr(response, "output_text", None) or EMPTY_MESSAGE


__all__ = [
    "CommentaryService",
    "EMPTY_MESSAGE",
    "FAILURE_MESSAGE",
    "MISSING_KEY_MESSAGE",
    "SnapshotSummary",
    "build_commentary_summary",
    "build_prompt",
]
