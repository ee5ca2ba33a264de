"""Net-worth API tests."""

from __future__ import annotations

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.dependencies.engine import get_commentary_service
from app.api.routes import api_router
from app.config import get_settings
from networth.commentary import CommentaryService

SNAPSHOTS = [
    {
        "date": "2024-01-01",
        "family_member": "Me",
        "items": [{"category": "Bank", "name": "Chase", "value": 1000, "currency": "USD"}],
    },
    {
        "date": "2024-02-01",
        "family_member": "Me",
        "items": [
            {"category": "Bank", "name": "Chase", "value": 1200, "currency": "USD"},
            {"category": "Loan", "name": "Mortgage", "value": -300, "currency": "USD"},
        ],
    },
]


class _StubCommentary(CommentaryService):
    def __init__(self) -> None:
        super().__init__("sk-test")
        self.focus = None

    def analyze(self, summary, focus=None):
        self.focus = focus
        return f"{len(summary)} snapshots reviewed"


def _app() -> FastAPI:
    app = FastAPI()
    app.include_router(api_router)
    return app


async def _post(app: FastAPI, path: str, payload: dict):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post(path, json=payload)


async def test_timeseries_endpoint():
    response = await _post(_app(), "/networth/timeseries", {"snapshots": SNAPSHOTS})

    assert response.status_code == 200
    payload = response.json()
    assert payload["points"] == [
        {"date": "2024-01-01", "values": {"Bank": 1000}, "total": 1000},
        {"date": "2024-02-01", "values": {"Bank": 1200, "Loan": -300}, "total": 900},
    ]
    assert payload["keys"] == ["Bank", "Loan"]


async def test_timeseries_keeps_date_when_a_category_is_named_date():
    snapshots = [
        {
            "date": "2024-01-01",
            "items": [
                {"category": "date", "name": "odd", "value": 5},
                {"category": "total", "name": "odder", "value": 2},
            ],
        }
    ]

    response = await _post(_app(), "/networth/timeseries", {"snapshots": snapshots})

    assert response.status_code == 200
    assert response.json()["points"] == [
        {"date": "2024-01-01", "values": {"date": 5, "total": 2}, "total": 7}
    ]


async def test_configured_rates_reach_the_views(monkeypatch):
    monkeypatch.setenv("CURRENCY_RATES", '{"EUR": 2.0}')
    get_settings.cache_clear()
    snapshots = [
        {"date": "2024-01-01", "items": [{"category": "Bank", "name": "N26", "value": 10, "currency": "EUR"}]}
    ]

    try:
        response = await _post(_app(), "/networth/breakdown", {"snapshots": snapshots})
    finally:
        get_settings.cache_clear()

    assert response.status_code == 200
    assert response.json()["net"] == 20


async def test_breakdown_endpoint_splits_liabilities():
    response = await _post(_app(), "/networth/breakdown", {"snapshots": SNAPSHOTS})

    assert response.status_code == 200
    payload = response.json()
    assert payload["date"] == "2024-02-01"
    assert payload["assets"] == [{"name": "Chase", "value": 1200, "original_value": 1200}]
    assert payload["liabilities"] == [{"name": "Mortgage", "value": 300, "original_value": -300}]
    assert payload["net"] == 900


async def test_pivot_endpoint_uses_null_for_empty_cells():
    response = await _post(_app(), "/networth/pivot", {"snapshots": SNAPSHOTS})

    assert response.status_code == 200
    payload = response.json()
    assert payload["columns"] == ["Chase (Bank)", "Mortgage (Loan)"]
    assert payload["rows"][0]["values"] == {"Chase (Bank)": 1000, "Mortgage (Loan)": None}
    assert payload["column_totals"] == {"Chase (Bank)": 2200, "Mortgage (Loan)": -300}
    assert payload["grand_total"] == 1900


async def test_options_endpoint_for_income():
    payload = {
        "source": "income",
        "income": [{"date": "2024-03-31", "category": "Dividend", "name": "VTI", "value": 5}],
    }

    response = await _post(_app(), "/networth/options", payload)

    assert response.status_code == 200
    assert response.json() == {"members": ["Me"], "categories": ["Dividend"], "months": ["2024-03"]}


async def test_asset_import_creates_then_replaces():
    app = _app()
    text = "2024-01-01,bank,Chase,1500\n2024-03-01,Art,Painting,900,Kid"

    first = await _post(app, "/networth/import/assets", {"text": text, "snapshots": SNAPSHOTS})
    assert first.status_code == 200
    created = first.json()
    assert (created["created"], created["updated"], created["imported_rows"]) == (1, 1, 2)
    assert created["snapshots"][0]["items"][0]["category"] == "Bank"
    assert created["snapshots"][0]["total_value"] == 1500
    assert "Art" in created["registry"]["categories"]
    assert "Kid" in created["registry"]["members"]

    second = await _post(
        app,
        "/networth/import/assets",
        {"text": text, "snapshots": created["snapshots"], "registry": created["registry"]},
    )
    repeated = second.json()
    assert (repeated["created"], repeated["updated"]) == (0, 2)
    assert len(repeated["snapshots"]) == len(created["snapshots"])


async def test_asset_preview_does_not_merge():
    response = await _post(_app(), "/networth/import/assets/preview", {"text": "bad,Bank,,abc\n2024-01-01,Bank,A,1"})

    assert response.status_code == 200
    rows = response.json()["rows"]
    assert len(rows) == 1
    assert rows[0]["family_member"] == "Me"


async def test_income_import_skips_duplicates():
    existing = [{"date": "2024-03-31", "category": "Dividend", "name": "VTI", "value": 5}]
    text = "2024-03-31,Dividend,VTI,5\n2024-04-30,,,7"

    response = await _post(_app(), "/networth/import/income", {"text": text, "income": existing})

    payload = response.json()
    assert (payload["added"], payload["skipped"]) == (1, 1)
    assert payload["income"][-1]["category"] == "Income"
    assert "Income" in payload["registry"]["income_categories"]


async def test_export_endpoint():
    response = await _post(_app(), "/networth/export", {"snapshots": SNAPSHOTS[:1]})

    payload = response.json()
    assert payload["income"] is None
    assert payload["assets"]["filename"].startswith("Asset_Snapshot_")
    assert payload["assets"]["content"].split("\n")[1] == "2024-01-01,Bank,Chase,1000,Me,USD"


async def test_clear_requires_confirmation():
    app = _app()

    refused = await _post(app, "/networth/data/clear", {})
    accepted = await _post(app, "/networth/data/clear", {"confirm": True})

    assert refused.status_code == 400
    assert accepted.status_code == 200
    assert accepted.json()["snapshots"] == []
    assert accepted.json()["registry"]["members"] == ["Me"]


async def test_commentary_endpoint_uses_injected_service():
    stub = _StubCommentary()
    app = _app()
    app.dependency_overrides[get_commentary_service] = lambda: stub

    response = await _post(
        app,
        "/networth/commentary",
        {"snapshots": SNAPSHOTS, "selection": {"category": "Loan"}},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["analysis"] == "2 snapshots reviewed"
    assert payload["summary"][1]["breakdown"] == ["Loan-Mortgage: -300"]
    assert payload["summary"][1]["total"] == 900
    assert stub.focus == "Loan"


async def test_stock_and_income_summaries():
    app = _app()

    stocks = await _post(
        app,
        "/networth/stocks/valuation",
        {"positions": [{"ticker": "aapl", "quantity": 2, "avg_cost": 100, "current_price": 110}]},
    )
    income = await _post(
        app,
        "/networth/income/summary",
        {"income": [{"date": "2024-03-31", "category": "Rent", "name": "Flat", "value": 800}], "year": "2024"},
    )

    assert stocks.json()["positions"][0]["ticker"] == "AAPL"
    assert stocks.json()["total_gain"] == 20
    assert income.json()["total"] == 800
    assert income.json()["by_category"] == [["Rent", 800]]
