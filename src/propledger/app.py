"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from propledger.adapters.snapshot import load_snapshot
from propledger.config import get_snapshot_config
from propledger.domain.queries import label_collections
from propledger.domain.reconciliation import reconcile

if TYPE_CHECKING:
    from pathlib import Path

    from propledger.adapters.snapshot import Snapshot
    from propledger.domain.model import ReconciliationResult


log = getLogger(__name__)


def reconcile_snapshot(path: str | Path | None = None) -> ReconciliationResult:
    """Load the configured snapshot and reconcile it into a ledger."""

    return reconcile_loaded_snapshot(_load(path))


def reconcile_loaded_snapshot(snapshot: Snapshot) -> ReconciliationResult:
    result = reconcile(
        assessments=snapshot.rows("assessments"),
        demands=snapshot.rows("demands"),
        collections=snapshot.rows("collections"),
        zones=snapshot.to_zones(),
        owners=snapshot.rows("owners"),
    )
    metrics = result.metrics
    log.info(
        "Reconciled ledger: records=%s, zones=%s, demand=%.2f, collected=%.2f, "
        "pending=%.2f, efficiency=%.1f%%",
        metrics.total_assessments,
        len(result.zones),
        metrics.total_demand,
        metrics.net_collections,
        metrics.pending_amount,
        metrics.efficiency,
    )
    return result


def payment_history(path: str | Path | None = None) -> list[dict[str, object]]:
    """Return the snapshot's payment rows labelled with reconciled owner names."""

    snapshot = _load(path)
    result = reconcile_loaded_snapshot(snapshot)
    return label_collections(snapshot.rows("collections"), result.name_map)


def _load(path: str | Path | None) -> Snapshot:
    config = get_snapshot_config(path=path)
    resolved = config.resolve_path()
    log.info("Loading snapshot from %s", resolved)
    return load_snapshot(resolved)
