"""Reconciled ledger entities.

Everything here is rebuilt from scratch on every reconciliation run; no entity
keeps identity across runs. Outstanding balances are always derived from the
accumulated totals and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, TypeAlias

UNASSIGNED_ZONE_ID: Final[str] = "unassigned"
UNASSIGNED_ZONE_NAME: Final[str] = "External / Unlinked"
DEFAULT_ZONE_NAME: Final[str] = "Zone"

Details: TypeAlias = dict[str, dict[str, object]]


@dataclass(slots=True, kw_only=True)
class PropertyRecord:
    """Per-property totals keyed by the normalized identifier."""

    id: str
    owner_name: str
    guardian_name: str = ""
    zone_id: str = UNASSIGNED_ZONE_ID
    demand: float = 0.0
    collected: float = 0.0
    details: Details = field(default_factory=dict)
    # False for records created from demand or collection rows alone.
    assessed: bool = True

    @property
    def pending(self) -> float:
        return self.demand - self.collected

    @property
    def is_settled(self) -> bool:
        return self.pending <= 0

    @property
    def is_orphan(self) -> bool:
        return not self.assessed


@dataclass(frozen=True, slots=True)
class Zone:
    """Master-list entry for an administrative zone (cluster)."""

    id: str
    name: str = DEFAULT_ZONE_NAME


@dataclass(frozen=True, slots=True, kw_only=True)
class ZoneSummary:
    id: str
    name: str
    record_count: int = 0
    demand: float = 0.0
    collected: float = 0.0

    @property
    def pending(self) -> float:
        return self.demand - self.collected


@dataclass(frozen=True, slots=True, kw_only=True)
class GlobalMetrics:
    """System-wide totals for one reconciliation run.

    ``efficiency`` is a percentage and is deliberately left unclamped: values
    above 100 signal overpayment.
    """

    total_assessments: int = 0
    total_demand: float = 0.0
    net_collections: float = 0.0

    @property
    def pending_amount(self) -> float:
        return self.total_demand - self.net_collections

    @property
    def efficiency(self) -> float:
        if self.total_demand == 0:
            return 0.0
        return self.net_collections / self.total_demand * 100


@dataclass(frozen=True, slots=True, kw_only=True)
class OwnerSummary:
    owner_name: str
    guardian_name: str = ""
    records: tuple[PropertyRecord, ...] = ()

    @property
    def total_demand(self) -> float:
        return sum(record.demand for record in self.records)

    @property
    def total_collected(self) -> float:
        return sum(record.collected for record in self.records)

    @property
    def total_pending(self) -> float:
        return sum(record.pending for record in self.records)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationResult:
    """Everything one reconciliation run produces.

    The name and guardian maps are exposed so other raw rows (payment history,
    for instance) can be relabelled without re-running the reconciliation.
    """

    ledger: tuple[PropertyRecord, ...]
    zones: tuple[ZoneSummary, ...]
    metrics: GlobalMetrics
    name_map: dict[str, str] = field(default_factory=dict)
    guardian_map: dict[str, str] = field(default_factory=dict)
