from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest

from propledger.adapters.snapshot import parse_snapshot
from propledger.app import payment_history, reconcile_loaded_snapshot, reconcile_snapshot
from propledger.config import MissingConfigurationError

if TYPE_CHECKING:
    from pathlib import Path


def test_worked_example(example_tables: dict[str, list[dict[str, Any]]]) -> None:
    result = reconcile_loaded_snapshot(parse_snapshot(example_tables))

    [record] = result.ledger
    assert (record.id, record.owner_name, record.zone_id) == ("A1", "John Doe", "Z1")
    assert (record.demand, record.collected, record.pending) == (1000, 400, 600)
    [zone] = result.zones
    assert (zone.id, zone.name, zone.record_count, zone.pending) == ("Z1", "Zone One", 1, 600)
    assert result.metrics.efficiency == pytest.approx(40)


def test_reconcile_snapshot_from_path(snapshot_file: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="propledger")

    result = reconcile_snapshot(snapshot_file)

    assert [record.id for record in result.ledger] == [
        "W2-001",
        "X-9",
        "W1-002",
        "W1-001",
        "W2-002",
        "P-77",
    ]
    assert result.metrics.total_demand == 10800
    assert "Reconciled ledger: records=6" in caplog.text


def test_reconcile_snapshot_from_environment(
    snapshot_file: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PROPLEDGER_SNAPSHOT", str(snapshot_file))

    result = reconcile_snapshot()

    assert result.metrics.total_assessments == 6


def test_reconcile_snapshot_without_configuration() -> None:
    with pytest.raises(MissingConfigurationError):
        reconcile_snapshot()


def test_payment_history_is_labelled(snapshot_file: Path) -> None:
    history = payment_history(snapshot_file)

    assert [(row["assessment_no"], row["owner_name"]) for row in history] == [
        ("W1-002", "Kiran Shah"),
        ("w1-001", "Lakshmi Devi"),
        ("W2-001", "Arjun Mehta"),
        ("P-77", "Property Owner"),
    ]
