"""Import merge tests."""

from __future__ import annotations

from datetime import date

from networth.bulk_import import parse_asset_rows
from networth.merge import CREATED_NOTE, UPDATED_NOTE, merge_asset_import, merge_income_import
from networth.models import AssetItem, IncomeRecord, Registry, Snapshot

TODAY = date(2025, 6, 1)

PASTE = "\n".join(
    [
        "2024-01-01,Bank,Chase,1000,Me,USD",
        "2024-01-01,Stock,VTI,200,Me,EUR",
        "2024-01-01,Bank,Barclays,50,Dad,GBP",
        "2024-02-01,Bank,Chase,1100,Me,USD",
    ]
)


def _keys(snapshots):
    return sorted((snapshot.date, snapshot.family_member) for snapshot in snapshots)


def test_rows_are_grouped_into_one_snapshot_per_date_and_member():
    rows = parse_asset_rows(PASTE, today=TODAY)

    result = merge_asset_import(rows, [])

    assert result.created == 3
    assert result.updated == 0
    assert _keys(result.snapshots) == [
        ("2024-01-01", "Dad"),
        ("2024-01-01", "Me"),
        ("2024-02-01", "Me"),
    ]
    first = result.snapshots[0]
    assert [item.name for item in first.items] == ["Chase", "VTI"]
    assert first.note == CREATED_NOTE
    # Raw total, no currency conversion.
    assert first.total_value == 1200.0


def test_importing_the_same_rows_twice_is_idempotent():
    rows = parse_asset_rows(PASTE, today=TODAY)
    first = merge_asset_import(rows, [])

    second = merge_asset_import(parse_asset_rows(PASTE, today=TODAY), first.snapshots, first.registry)

    assert second.created == 0
    assert second.updated == 3
    assert len(second.snapshots) == len(first.snapshots)
    assert [s.id for s in second.snapshots] == [s.id for s in first.snapshots]
    for before, after in zip(first.snapshots, second.snapshots):
        assert [(i.category, i.name, i.value) for i in after.items] == [
            (i.category, i.name, i.value) for i in before.items
        ]
        assert after.note == UPDATED_NOTE


def test_matching_snapshot_items_are_replaced_wholesale():
    existing = Snapshot.build(
        "2024-01-01",
        "Me",
        [AssetItem("Bank", "Chase", 1000.0), AssetItem("Stock", "VTI", 50.0)],
        note="typed by hand",
    )
    untouched = Snapshot.build("2023-12-01", "Me", [AssetItem("Cash", "Wallet", 20.0)])
    rows = parse_asset_rows("2024-01-01,Bank,Chase,1500,Me", today=TODAY)

    result = merge_asset_import(rows, [untouched, existing])

    assert result.snapshots[0] == untouched
    replaced = result.snapshots[1]
    assert replaced.id == existing.id
    assert [(i.name, i.value) for i in replaced.items] == [("Chase", 1500.0)]
    assert replaced.total_value == 1500.0
    assert replaced.note == UPDATED_NOTE


def test_registry_grows_with_unseen_categories_and_members():
    rows = parse_asset_rows("2024-01-01,Art,Painting,900,Kid\n2024-01-01,bank,Chase,5,Kid", today=TODAY)
    registry = Registry(categories=("Bank",), members=("Me",))

    result = merge_asset_import(rows, [], registry)
    again = merge_asset_import(rows, result.snapshots, result.registry)

    assert result.registry.categories == ("Bank", "Art", "bank")
    assert result.registry.members == ("Me", "Kid")
    assert again.registry == result.registry


def test_income_import_skips_records_already_present():
    existing = [IncomeRecord(date="2024-03-31", category="Dividend", name="VTI", value=50.0)]
    incoming = [
        IncomeRecord(date="2024-03-31", category="Dividend", name="VTI", value=50.0, currency="EUR"),
        IncomeRecord(date="2024-03-31", category="Royalty", name="Book", value=10.0),
    ]

    result = merge_income_import(incoming, existing, Registry())

    assert result.added == 1
    assert result.skipped == 1
    assert [record.name for record in result.records] == ["VTI", "Book"]
    assert result.registry.income_categories[-1] == "Royalty"
