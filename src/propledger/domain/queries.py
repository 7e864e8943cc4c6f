"""Read-side helpers over a reconciled ledger."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Final

from propledger.domain.model import OwnerSummary, ZoneStatus
from propledger.domain.reconciliation.identifiers import normalize_id

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from propledger.domain.model import PropertyRecord

DEFAULT_PAYER_LABEL: Final[str] = "Property Owner"
PAYMENT_DATE_FIELD: Final[str] = "date_of_payment"

# Share of the demand still pending above which a zone needs attention.
ACTION_NEEDED_RATIO: Final[float] = 0.5


def search_records(
    ledger: Sequence[PropertyRecord],
    query: str | None,
) -> tuple[PropertyRecord, ...]:
    """Case-insensitive substring match on owner name or identifier."""

    needle = (query or "").strip().lower()
    if not needle:
        return tuple(ledger)
    return tuple(
        record
        for record in ledger
        if needle in record.owner_name.lower() or needle in record.id.lower()
    )


def zone_records(
    ledger: Sequence[PropertyRecord],
    zone_id: str,
    query: str | None = None,
) -> tuple[PropertyRecord, ...]:
    """Records of one zone, largest outstanding balance first."""

    matching = [record for record in search_records(ledger, query) if record.zone_id == zone_id]
    return tuple(sorted(matching, key=lambda record: record.pending, reverse=True))


def summarize_owner(
    owner_name: str,
    records: Iterable[PropertyRecord],
    guardian_name: str = "",
) -> OwnerSummary:
    return OwnerSummary(owner_name=owner_name, guardian_name=guardian_name, records=tuple(records))


def owner_records(ledger: Sequence[PropertyRecord], owner_name: str) -> tuple[PropertyRecord, ...]:
    return tuple(record for record in ledger if record.owner_name == owner_name)


def zone_status(pending: float, demand: float) -> ZoneStatus:
    if pending <= 0:
        return ZoneStatus.SETTLED
    if pending / (demand or 1) > ACTION_NEEDED_RATIO:
        return ZoneStatus.ACTION_NEEDED
    return ZoneStatus.ONGOING


def label_collections(
    collections: Iterable[Mapping[str, object]],
    name_map: Mapping[str, str],
) -> list[dict[str, object]]:
    """Relabel raw payment rows with reconciled owner names, newest first.

    Rows keep all their fields; only ``owner_name`` is replaced. Rows whose
    payment date cannot be parsed are listed after all dated rows.
    """

    labelled: list[dict[str, object]] = []
    for row in collections:
        record_id = normalize_id(row.get("assessment_no"))
        resolved = name_map.get(record_id) if record_id else None
        labelled.append(
            {**row, "owner_name": resolved or row.get("owner_name") or DEFAULT_PAYER_LABEL}
        )

    dated = [(row, _parse_payment_date(row.get(PAYMENT_DATE_FIELD))) for row in labelled]
    known = sorted(
        ((row, paid_at) for row, paid_at in dated if paid_at is not None),
        key=lambda item: item[1],
        reverse=True,
    )
    unknown = [row for row, paid_at in dated if paid_at is None]
    return [row for row, _ in known] + unknown


def _parse_payment_date(value: object) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(normalized)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


__all__ = [
    "ACTION_NEEDED_RATIO",
    "DEFAULT_PAYER_LABEL",
    "label_collections",
    "owner_records",
    "search_records",
    "summarize_owner",
    "zone_records",
    "zone_status",
]
