"""Roll reconciled property records up into zone and system-wide totals."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from propledger.domain.model import (
    DEFAULT_ZONE_NAME,
    UNASSIGNED_ZONE_ID,
    UNASSIGNED_ZONE_NAME,
    GlobalMetrics,
    Zone,
    ZoneSummary,
)

from .values import stringify

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from propledger.domain.model import PropertyRecord


def coerce_zone(zone: Zone | Mapping[str, object]) -> Zone:
    """Accept master-list entries as ``Zone`` objects or ``{id, name}`` mappings."""

    if isinstance(zone, Zone):
        return Zone(id=zone.id.strip(), name=zone.name or DEFAULT_ZONE_NAME)
    name = zone.get("name")
    return Zone(
        id=stringify(zone.get("id")).strip(),
        name=stringify(name) if name else DEFAULT_ZONE_NAME,
    )


def summarize_zones(
    ledger: Sequence[PropertyRecord],
    zones: Iterable[Zone | Mapping[str, object]] | None,
) -> tuple[ZoneSummary, ...]:
    """Emit one summary per master-list zone and per zone referenced by a record.

    Master zones come first, in list order, even when no record belongs to them.
    Zones referenced by records but missing from the master list follow in
    first-seen order and are named after their id; unassigned records get the
    synthetic "External / Unlinked" zone. Every record lands in exactly one
    summary.
    """

    catalog: dict[str, Zone] = {}
    for entry in zones or ():
        zone = coerce_zone(entry)
        catalog.setdefault(zone.id, zone)

    members: dict[str, list[PropertyRecord]] = {zone_id: [] for zone_id in catalog}
    for record in ledger:
        members.setdefault(record.zone_id, []).append(record)

    needs_unassigned = False
    for zone_id in members:
        if zone_id in catalog:
            continue
        if zone_id == UNASSIGNED_ZONE_ID:
            needs_unassigned = True
            continue
        catalog[zone_id] = Zone(id=zone_id, name=zone_id)
    if needs_unassigned:
        catalog[UNASSIGNED_ZONE_ID] = Zone(id=UNASSIGNED_ZONE_ID, name=UNASSIGNED_ZONE_NAME)

    return tuple(
        ZoneSummary(
            id=zone.id,
            name=zone.name,
            record_count=len(members[zone.id]),
            demand=sum((record.demand for record in members[zone.id]), 0.0),
            collected=sum((record.collected for record in members[zone.id]), 0.0),
        )
        for zone in catalog.values()
    )


def compute_global_metrics(ledger: Sequence[PropertyRecord]) -> GlobalMetrics:
    return GlobalMetrics(
        total_assessments=len(ledger),
        total_demand=sum((record.demand for record in ledger), 0.0),
        net_collections=sum((record.collected for record in ledger), 0.0),
    )


__all__ = ["coerce_zone", "compute_global_metrics", "summarize_zones"]
