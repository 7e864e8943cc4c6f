from __future__ import annotations

from datetime import date

import pytest

from propledger.domain.model import PropertyRecord, ZoneStatus
from propledger.domain.queries import (
    DEFAULT_PAYER_LABEL,
    label_collections,
    owner_records,
    search_records,
    summarize_owner,
    zone_records,
    zone_status,
)


@pytest.fixture
def ledger() -> tuple[PropertyRecord, ...]:
    return (
        PropertyRecord(id="W1-001", owner_name="Lakshmi Devi", zone_id="Z1", demand=500),
        PropertyRecord(id="W1-002", owner_name="Kiran Shah", zone_id="Z1", demand=900, collected=100),
        PropertyRecord(id="W2-001", owner_name="Kiran Shah", zone_id="Z2", demand=300, collected=300),
        PropertyRecord(id="X-9", owner_name="Farhan Ali", demand=50),
    )


def test_search_matches_owner_name_or_identifier(ledger: tuple[PropertyRecord, ...]) -> None:
    assert [record.id for record in search_records(ledger, "kiran")] == ["W1-002", "W2-001"]
    assert [record.id for record in search_records(ledger, "w1-")] == ["W1-001", "W1-002"]


def test_blank_search_returns_everything(ledger: tuple[PropertyRecord, ...]) -> None:
    assert search_records(ledger, "  ") == ledger
    assert search_records(ledger, None) == ledger


def test_zone_records_orders_by_pending_descending(ledger: tuple[PropertyRecord, ...]) -> None:
    assert [record.id for record in zone_records(ledger, "Z1")] == ["W1-002", "W1-001"]
    assert [record.id for record in zone_records(ledger, "Z1", "lakshmi")] == ["W1-001"]
    assert zone_records(ledger, "Z404") == ()


def test_summarize_owner_totals(ledger: tuple[PropertyRecord, ...]) -> None:
    records = owner_records(ledger, "Kiran Shah")

    summary = summarize_owner("Kiran Shah", records, "Dev Shah")

    assert [record.id for record in summary.records] == ["W1-002", "W2-001"]
    assert summary.guardian_name == "Dev Shah"
    assert summary.total_demand == 1200
    assert summary.total_collected == 400
    assert summary.total_pending == 800


@pytest.mark.parametrize(
    ("pending", "demand", "expected"),
    [
        (0, 100, ZoneStatus.SETTLED),
        (-20, 100, ZoneStatus.SETTLED),
        (50, 100, ZoneStatus.ONGOING),
        (51, 100, ZoneStatus.ACTION_NEEDED),
        (5, 0, ZoneStatus.ACTION_NEEDED),
    ],
)
def test_zone_status_thresholds(pending: float, demand: float, expected: ZoneStatus) -> None:
    assert zone_status(pending, demand) is expected


def test_record_settlement_flag(ledger: tuple[PropertyRecord, ...]) -> None:
    assert [record.is_settled for record in ledger] == [False, False, True, False]


def test_label_collections_uses_reconciled_names_newest_first() -> None:
    collections = [
        {"id": 1, "assessment_no": "w1-001", "total_tax": 10, "date_of_payment": "2024-03-01"},
        {"id": 2, "assessment_no": "Z-1", "owner_name": "Typed Name", "date_of_payment": "oops"},
        {"id": 3, "assessment_no": "W1 -002", "date_of_payment": "2024-04-15T10:00:00Z"},
        {"id": 4, "date_of_payment": date(2024, 1, 2)},
    ]
    name_map = {"W1-001": "Lakshmi Devi", "W1-002": "Kiran Shah"}

    labelled = label_collections(collections, name_map)

    assert [(row["id"], row["owner_name"]) for row in labelled] == [
        (3, "Kiran Shah"),
        (1, "Lakshmi Devi"),
        (4, DEFAULT_PAYER_LABEL),
        (2, "Typed Name"),
    ]
    assert labelled[1]["total_tax"] == 10
    assert collections[0].get("owner_name") is None
