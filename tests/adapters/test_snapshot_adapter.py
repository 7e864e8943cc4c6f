from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from propledger.adapters.snapshot import SnapshotError, load_snapshot, parse_snapshot
from propledger.domain.model import Zone

if TYPE_CHECKING:
    from pathlib import Path


def test_load_snapshot_reads_all_tables(snapshot_file: Path) -> None:
    snapshot = load_snapshot(snapshot_file)

    assert len(snapshot.assessments) == 5
    assert len(snapshot.demands) == 7
    assert len(snapshot.collections) == 4
    assert len(snapshot.owners) == 2
    assert snapshot.to_zones() == [
        Zone("Z1", "Ward One"),
        Zone("Z2", "Ward Two"),
        Zone("Z3", "Ward Three"),
    ]


def test_missing_tables_default_to_empty() -> None:
    snapshot = parse_snapshot({"assessments": [{"assessment_no": "A1"}], "exported_at": "today"})

    assert snapshot.rows("assessments") == [{"assessment_no": "A1"}]
    assert snapshot.rows("owners") == []
    assert snapshot.to_zones() == []
    assert "exported_at" not in snapshot.model_dump()


def test_rows_are_copies() -> None:
    snapshot = parse_snapshot({"demands": [{"assessment_no": "A1", "total_demand": 5}]})

    rows = snapshot.rows("demands")
    rows[0]["total_demand"] = 500

    assert snapshot.demands[0]["total_demand"] == 5


def test_zone_ids_are_stringified() -> None:
    snapshot = parse_snapshot({"zones": [{"id": 7, "name": None}, {"id": " Z2 ", "name": "Two"}]})

    assert snapshot.to_zones() == [Zone("7", "Zone"), Zone("Z2", "Two")]


def test_numeric_zone_names_are_stringified() -> None:
    snapshot = parse_snapshot({"zones": [{"id": 1, "name": 5}, {"id": 2, "name": 2.0}]})

    assert snapshot.to_zones() == [Zone("1", "5"), Zone("2", "2")]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"assessments": "not a table"},
        {"zones": [{"name": "No id"}]},
        {"owners": [["row", "as", "list"]]},
    ],
)
def test_parse_snapshot_rejects_wrong_shape(payload: object) -> None:
    with pytest.raises(SnapshotError):
        parse_snapshot(payload)


def test_load_snapshot_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError, match="not found"):
        load_snapshot(tmp_path / "absent.json")


def test_load_snapshot_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotError, match="not valid JSON"):
        load_snapshot(path)


def test_load_snapshot_schema_error(tmp_path: Path) -> None:
    path = tmp_path / "wrong.json"
    path.write_text(json.dumps({"collections": {"total_tax": 1}}), encoding="utf-8")

    with pytest.raises(SnapshotError, match="Invalid snapshot"):
        load_snapshot(path)
