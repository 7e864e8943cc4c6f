"""Pydantic models and loader for JSON snapshots of the source tables.

A snapshot is one JSON object holding complete copies of the four source
tables and the zone master list::

    {
      "assessments": [{"assessment_no": "A1", "owner_name": "...", "cluster_id": "Z1"}],
      "demands": [{"assessment_no": "A1", "total_demand": 1000}],
      "collections": [{"assessment_no": "A1", "total_tax": 400, "date_of_payment": "..."}],
      "owners": [{"id": 1, "assessment_no": "A1", "name": "...", "father_name": "..."}],
      "zones": [{"id": "Z1", "name": "Zone One"}]
    }

Rows are deliberately schemaless beyond being JSON objects; the reconciliation
engine copes with whatever fields they carry.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from propledger.domain.model import DEFAULT_ZONE_NAME, Zone
from propledger.domain.reconciliation.values import stringify

if TYPE_CHECKING:
    from pathlib import Path

Table: TypeAlias = Literal["assessments", "demands", "collections", "owners"]

log = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or does not match the schema."""


class SnapshotBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ZoneEntry(SnapshotBaseModel):
    id: str
    name: str | None = None

    @field_validator("id", "name", mode="before")
    @classmethod
    def _stringify_scalars(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return value
        return stringify(value)

    def to_domain(self) -> Zone:
        return Zone(id=self.id.strip(), name=self.name or DEFAULT_ZONE_NAME)


class Snapshot(SnapshotBaseModel):
    assessments: list[dict[str, Any]] = Field(default_factory=list)
    demands: list[dict[str, Any]] = Field(default_factory=list)
    collections: list[dict[str, Any]] = Field(default_factory=list)
    owners: list[dict[str, Any]] = Field(default_factory=list)
    zones: list[ZoneEntry] = Field(default_factory=list)

    def rows(self, table: Table) -> list[dict[str, Any]]:
        return [dict(row) for row in getattr(self, table)]

    def to_zones(self) -> list[Zone]:
        return [entry.to_domain() for entry in self.zones]


def parse_snapshot(payload: object) -> Snapshot:
    try:
        return Snapshot.model_validate(payload)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot: {exc}") from exc


def load_snapshot(path: Path) -> Snapshot:
    """Read and validate the snapshot stored at ``path``."""

    try:
        with path.open(encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise SnapshotError(f"Snapshot not found: {path}") from exc
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SnapshotError(f"Snapshot is not valid JSON: {path}: {exc}") from exc

    snapshot = parse_snapshot(payload)
    log.debug(
        "Loaded snapshot %s: assessments=%s, demands=%s, collections=%s, owners=%s, zones=%s",
        path,
        len(snapshot.assessments),
        len(snapshot.demands),
        len(snapshot.collections),
        len(snapshot.owners),
        len(snapshot.zones),
    )
    return snapshot


__all__ = ["Snapshot", "SnapshotError", "ZoneEntry", "load_snapshot", "parse_snapshot"]
