"""Public domain model surface."""

from __future__ import annotations

from propledger.domain.model.enums import ZoneStatus
from propledger.domain.model.ledger import (
    DEFAULT_ZONE_NAME,
    UNASSIGNED_ZONE_ID,
    UNASSIGNED_ZONE_NAME,
    Details,
    GlobalMetrics,
    OwnerSummary,
    PropertyRecord,
    ReconciliationResult,
    Zone,
    ZoneSummary,
)

__all__ = [
    "DEFAULT_ZONE_NAME",
    "UNASSIGNED_ZONE_ID",
    "UNASSIGNED_ZONE_NAME",
    "Details",
    "GlobalMetrics",
    "OwnerSummary",
    "PropertyRecord",
    "ReconciliationResult",
    "Zone",
    "ZoneStatus",
    "ZoneSummary",
]
