"""Two-pass reconciliation of the property source tables into one ledger.

Pass 1 discovers the best owner and guardian name per normalized identifier
across all four tables. Pass 2 seeds one ledger entry per assessment and folds
the demand and collection rows into it, creating orphan entries for
identifiers the assessment registry does not know.

The engine is a pure function of its inputs: every intermediate map is local
to one call and nothing is cached between calls. Malformed rows never raise;
rows without an identifier are dropped and bad amounts contribute nothing.
"""

from __future__ import annotations

import logging
import unicodedata
from itertools import chain
from typing import TYPE_CHECKING, Final, TypeAlias

from propledger.domain.model import UNASSIGNED_ZONE_ID, PropertyRecord, ReconciliationResult

from .aggregate import compute_global_metrics, summarize_zones
from .details import categorize_details
from .identifiers import resolve_id
from .names import resolve_guardian_name, resolve_name
from .values import coerce_amount, stringify

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from propledger.domain.model import Zone

ZONE_FIELD: Final[str] = "cluster_id"
DEMAND_FIELD: Final[str] = "total_demand"
COLLECTION_FIELD: Final[str] = "total_tax"

OWNER_PLACEHOLDER: Final[str] = "Owner [ID:{id}]"
EXTERNAL_PLACEHOLDER: Final[str] = "External [ID:{id}]"
PAYER_PLACEHOLDER: Final[str] = "Payer [ID:{id}]"

Row: TypeAlias = "Mapping[str, object]"

log = logging.getLogger(__name__)


def discover_names(
    *,
    assessments: Iterable[Row] = (),
    demands: Iterable[Row] = (),
    collections: Iterable[Row] = (),
    owners: Iterable[Row] = (),
) -> tuple[dict[str, str], dict[str, str]]:
    """Build the identifier -> name and identifier -> guardian maps.

    Precedence:
    - the owner registry always overwrites;
    - an assessment name replaces a stored one only when strictly longer,
      assessment guardians only fill gaps;
    - demand and collection rows only fill identifiers still missing a value.
    """

    names: dict[str, str] = {}
    guardians: dict[str, str] = {}

    for row in owners:
        record_id = resolve_id(row)
        if record_id is None:
            continue
        if name := resolve_name(row):
            names[record_id] = name
        if guardian := resolve_guardian_name(row):
            guardians[record_id] = guardian

    for row in assessments:
        record_id = resolve_id(row)
        if record_id is None:
            continue
        name = resolve_name(row)
        if name and len(name) > len(names.get(record_id, "")):
            names[record_id] = name
        if guardian := resolve_guardian_name(row):
            guardians.setdefault(record_id, guardian)

    for row in chain(demands, collections):
        record_id = resolve_id(row)
        if record_id is None:
            continue
        if record_id not in names and (name := resolve_name(row)):
            names[record_id] = name
        if record_id not in guardians and (guardian := resolve_guardian_name(row)):
            guardians[record_id] = guardian

    return names, guardians


def build_ledger(
    *,
    assessments: Iterable[Row] = (),
    demands: Iterable[Row] = (),
    collections: Iterable[Row] = (),
    name_map: Mapping[str, str],
    guardian_map: Mapping[str, str],
) -> tuple[PropertyRecord, ...]:
    """Merge the source tables into per-property records ordered by owner name."""

    registry: dict[str, PropertyRecord] = {}
    dropped = 0

    for row in assessments:
        record_id = resolve_id(row)
        if record_id is None:
            dropped += 1
            continue
        registry[record_id] = PropertyRecord(
            id=record_id,
            owner_name=name_map.get(record_id) or OWNER_PLACEHOLDER.format(id=record_id),
            guardian_name=guardian_map.get(record_id, ""),
            zone_id=_zone_id(row),
            details=categorize_details(row),
            assessed=True,
        )

    for row in demands:
        record = _record_for(row, registry, name_map, guardian_map, EXTERNAL_PLACEHOLDER)
        if record is None:
            dropped += 1
            continue
        record.demand += coerce_amount(row.get(DEMAND_FIELD))

    for row in collections:
        record = _record_for(row, registry, name_map, guardian_map, PAYER_PLACEHOLDER)
        if record is None:
            dropped += 1
            continue
        record.collected += coerce_amount(row.get(COLLECTION_FIELD))

    if dropped:
        log.debug("Dropped %s source rows without a resolvable identifier", dropped)

    return tuple(sorted(registry.values(), key=lambda record: collation_key(record.owner_name)))


def reconcile(
    *,
    assessments: Sequence[Row] = (),
    demands: Sequence[Row] = (),
    collections: Sequence[Row] = (),
    zones: Iterable[Zone | Mapping[str, object]] | None = (),
    owners: Sequence[Row] = (),
) -> ReconciliationResult:
    """Run the full pipeline: names, ledger, zone summaries and global metrics."""

    name_map, guardian_map = discover_names(
        assessments=assessments,
        demands=demands,
        collections=collections,
        owners=owners,
    )
    ledger = build_ledger(
        assessments=assessments,
        demands=demands,
        collections=collections,
        name_map=name_map,
        guardian_map=guardian_map,
    )
    return ReconciliationResult(
        ledger=ledger,
        zones=summarize_zones(ledger, zones),
        metrics=compute_global_metrics(ledger),
        name_map=name_map,
        guardian_map=guardian_map,
    )


def collation_key(text: str) -> tuple[str, str]:
    """Sort key comparing accent- and case-insensitively first, then exactly."""

    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _zone_id(row: Row) -> str:
    value = row.get(ZONE_FIELD)
    if not value:
        return UNASSIGNED_ZONE_ID
    return stringify(value).strip() or UNASSIGNED_ZONE_ID


def _record_for(
    row: Row,
    registry: dict[str, PropertyRecord],
    name_map: Mapping[str, str],
    guardian_map: Mapping[str, str],
    placeholder: str,
) -> PropertyRecord | None:
    record_id = resolve_id(row)
    if record_id is None:
        return None
    record = registry.get(record_id)
    if record is None:
        record = PropertyRecord(
            id=record_id,
            owner_name=name_map.get(record_id)
            or resolve_name(row)
            or placeholder.format(id=record_id),
            guardian_name=guardian_map.get(record_id) or resolve_guardian_name(row) or "",
            zone_id=UNASSIGNED_ZONE_ID,
            assessed=False,
        )
        registry[record_id] = record
    return record


__all__ = [
    "COLLECTION_FIELD",
    "DEMAND_FIELD",
    "ZONE_FIELD",
    "build_ledger",
    "collation_key",
    "discover_names",
    "reconcile",
]
