"""Reconciliation core for the property tax source tables.

Layered flow of one run:
1) normalize identifiers (the only merge key across tables)
2) discover owner and guardian names across all tables (pass 1)
3) seed the ledger from assessments and fold in demands and collections (pass 2)
4) roll the ledger up into zone summaries and global metrics
"""

from __future__ import annotations

from .aggregate import coerce_zone, compute_global_metrics, summarize_zones
from .details import categorize_details
from .engine import build_ledger, collation_key, discover_names, reconcile
from .identifiers import normalize_id, resolve_id
from .names import is_valid_name, resolve_guardian_name, resolve_name
from .values import coerce_amount

__all__ = [
    "build_ledger",
    "categorize_details",
    "coerce_amount",
    "coerce_zone",
    "collation_key",
    "compute_global_metrics",
    "discover_names",
    "is_valid_name",
    "normalize_id",
    "reconcile",
    "resolve_guardian_name",
    "resolve_id",
    "resolve_name",
    "summarize_zones",
]
