from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TypeAlias

import pytest

if TYPE_CHECKING:
    from pathlib import Path

Row: TypeAlias = dict[str, Any]


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROPLEDGER_SNAPSHOT", raising=False)
    monkeypatch.delenv("PROPLEDGER_LOG_LEVEL", raising=False)


@pytest.fixture
def example_tables() -> dict[str, list[Row]]:
    """The single-property scenario used throughout the docs."""

    return {
        "assessments": [{"assessment_no": "A1", "owner_name": "John Doe", "cluster_id": "Z1"}],
        "demands": [{"assessment_no": "a1", "total_demand": 1000}],
        "collections": [{"assessment_no": "A1 ", "total_tax": 400}],
        "owners": [],
        "zones": [{"id": "Z1", "name": "Zone One"}],
    }


@pytest.fixture
def municipal_tables() -> dict[str, list[Row]]:
    """A messier snapshot: mixed id spellings, noise names, orphans and bad amounts."""

    return {
        "assessments": [
            {
                "assessment_no": "w1-001",
                "owner_name": "Lakshmi Devi",
                "father_name": "Gopal Rao",
                "cluster_id": "Z1",
                "mobile_no": "9800000001",
                "plot_area": 1200,
            },
            {"assessment_no": "W1-002", "owner_name": "N/A", "cluster_id": "Z1"},
            {"assessment_no": "W2-001", "Owner Full Name": "Arjun Mehta", "cluster_id": "Z2"},
            {"assessment_no": "W2-002", "owner_name": "unknown", "cluster_id": ""},
            {"owner_name": "Row Without Id", "cluster_id": "Z2"},
        ],
        "demands": [
            {"assessment_no": "W1-001", "total_demand": 5000},
            {"assessment_no": "W1 -002", "total_demand": "3000"},
            {"assessment_no": "W2-001", "total_demand": 2000},
            {"assessment_no": "W2-001", "total_demand": -750},
            {"assessment_no": "W2-002", "total_demand": "n/a"},
            {"assessment_no": "X-9", "payer_name": "Farhan Ali", "total_demand": 800},
            {"total_demand": 999},
        ],
        "collections": [
            {"assessment_no": "w1-001", "total_tax": 5000, "date_of_payment": "2024-03-01"},
            {"assessment_no": "W1-002", "total_tax": 1000, "date_of_payment": "2024-04-15"},
            {"assessment_no": "W2-001", "total_tax": 2500, "date_of_payment": "2024-02-10"},
            {"assessment_no": "P-77", "total_tax": 300, "date_of_payment": "bad date"},
        ],
        "owners": [
            {"id": 1, "assessment_no": "W1-002", "name": "Kiran Shah", "husband_name": "Dev Shah"},
            {"id": 2, "assessment_no": "W2-001", "name": "Arjun M"},
        ],
        "zones": [
            {"id": "Z1", "name": "Ward One"},
            {"id": "Z2", "name": "Ward Two"},
            {"id": "Z3", "name": "Ward Three"},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, municipal_tables: dict[str, list[Row]]) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(municipal_tables), encoding="utf-8")
    return path
