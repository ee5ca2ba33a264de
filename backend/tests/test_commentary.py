"""Commentary summary and service tests."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from networth.commentary import (
    EMPTY_MESSAGE,
    FAILURE_MESSAGE,
    MISSING_KEY_MESSAGE,
    CommentaryService,
    build_commentary_summary,
    build_prompt,
)
from networth.filters import FilterSelection
from networth.models import AssetItem, Snapshot


class _FakeResponses:
    def __init__(self, text: str | None = None, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output_text=self.text)


def _client(**kwargs) -> SimpleNamespace:
    return SimpleNamespace(responses=_FakeResponses(**kwargs))


def _history(count: int) -> list[Snapshot]:
    return [
        Snapshot.build(f"2024-{month:02d}-01", "Me", [AssetItem("Bank", "Chase", 100.0 * month)])
        for month in range(count, 0, -1)
    ]


def test_summary_keeps_the_most_recent_snapshots_in_date_order():
    summary = build_commentary_summary(_history(12))

    assert len(summary) == 10
    assert summary[0].date == "2024-03-01"
    assert summary[-1].date == "2024-12-01"
    assert summary[-1].breakdown == ["Bank-Chase: 1200"]
    assert summary[-1].total == 1200


def test_summary_normalizes_and_focuses_on_category():
    snapshot = Snapshot.build(
        "2024-01-01",
        "Me",
        [
            AssetItem("Bank", "N26", 1000.0, "EUR"),
            AssetItem("Stock", "VTI", 50.0),
            AssetItem("Other", "Bank bonus", 5.0),
        ],
    )

    summary = build_commentary_summary([snapshot], FilterSelection(category="Bank"))

    assert summary[0].breakdown == ["Bank-N26: 1050", "Other-Bank bonus: 5"]
    assert summary[0].total == pytest.approx(1105.0)


def test_summary_respects_member_and_range():
    snapshots = _history(6) + [Snapshot.build("2024-03-01", "Dad", [AssetItem("Bank", "X", 1.0)])]

    summary = build_commentary_summary(
        snapshots, FilterSelection(family_member="Me", start_month="2024-02", end_month="2024-03")
    )

    assert [entry.date for entry in summary] == ["2024-02-01", "2024-03-01"]


def test_prompt_mentions_focus_and_data():
    summary = build_commentary_summary(_history(1))

    assert 'category or tag: "Bank"' in build_prompt(summary, "Bank")
    assert "holistic overview" in build_prompt(summary)
    assert '"date": "2024-01-01"' in build_prompt(summary)


def test_missing_key_short_circuits():
    assert CommentaryService(None).analyze([]) == MISSING_KEY_MESSAGE


def test_analysis_text_is_returned():
    client = _client(text="## Looking good")
    service = CommentaryService("sk-test", "gpt-test", client=client)

    result = service.analyze(build_commentary_summary(_history(2)), "Bank")

    assert result == "## Looking good"
    call = client.responses.calls[0]
    assert call["model"] == "gpt-test"
    assert "Bank" in call["input"]


def test_empty_response_and_failures_become_messages():
    assert CommentaryService("sk-test", client=_client(text="")).analyze([]) == EMPTY_MESSAGE
    failing = CommentaryService("sk-test", client=_client(error=RuntimeError("boom")))

    assert failing.analyze([]) == FAILURE_MESSAGE
