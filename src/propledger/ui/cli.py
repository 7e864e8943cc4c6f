# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from propledger.app import payment_history, reconcile_snapshot
from propledger.config import ConfigurationError, configure_logging
from propledger.domain.queries import (
    owner_records,
    search_records,
    summarize_owner,
    zone_records,
    zone_status,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from propledger.domain.model import GlobalMetrics, OwnerSummary, PropertyRecord, ZoneSummary

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile property tax ledgers")
    parser.add_argument(
        "--snapshot",
        type=str,
        help="Path to the JSON snapshot (defaults to $PROPLEDGER_SNAPSHOT)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Print system-wide collection metrics")
    subparsers.add_parser("zones", help="Print per-zone totals and status")

    records = subparsers.add_parser("records", help="Print reconciled property records")
    records.add_argument("--zone", type=str, help="Only records of this zone id")
    records.add_argument("--query", type=str, help="Filter by owner name or identifier")
    records.add_argument("--limit", type=int, help="Maximum number of records to print")

    owner = subparsers.add_parser("owner", help="Print totals for one owner")
    owner.add_argument("name", type=str, help="Exact reconciled owner name")

    payments = subparsers.add_parser("payments", help="Print labelled payment history")
    payments.add_argument("--limit", type=int, help="Maximum number of payments to print")

    args = parser.parse_args(list(argv))
    limit = getattr(args, "limit", None)
    if limit is not None and limit < 0:
        raise ValueError("Limit must be non-negative")
    return args


def _record_payload(record: PropertyRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "owner_name": record.owner_name,
        "guardian_name": record.guardian_name,
        "zone_id": record.zone_id,
        "demand": record.demand,
        "collected": record.collected,
        "pending": record.pending,
        "settled": record.is_settled,
        "orphan": record.is_orphan,
        "details": record.details,
    }


def _zone_payload(zone: ZoneSummary) -> dict[str, object]:
    return {
        "id": zone.id,
        "name": zone.name,
        "record_count": zone.record_count,
        "demand": zone.demand,
        "collected": zone.collected,
        "pending": zone.pending,
        "status": str(zone_status(zone.pending, zone.demand)),
    }


def _metrics_payload(metrics: GlobalMetrics) -> dict[str, object]:
    return {
        "total_assessments": metrics.total_assessments,
        "total_demand": metrics.total_demand,
        "net_collections": metrics.net_collections,
        "pending_amount": metrics.pending_amount,
        "efficiency": metrics.efficiency,
    }


def _owner_payload(summary: OwnerSummary) -> dict[str, object]:
    return {
        "owner_name": summary.owner_name,
        "guardian_name": summary.guardian_name,
        "total_demand": summary.total_demand,
        "total_collected": summary.total_collected,
        "total_pending": summary.total_pending,
        "records": [_record_payload(record) for record in summary.records],
    }


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _run(args: argparse.Namespace) -> object:
    if args.command == "payments":
        history = payment_history(args.snapshot)
        return history[: args.limit] if args.limit is not None else history

    result = reconcile_snapshot(args.snapshot)
    if args.command == "summary":
        return _metrics_payload(result.metrics)
    if args.command == "zones":
        return [_zone_payload(zone) for zone in result.zones]
    if args.command == "records":
        if args.zone is not None:
            selected = zone_records(result.ledger, args.zone.strip(), args.query)
        else:
            selected = search_records(result.ledger, args.query)
        if args.limit is not None:
            selected = selected[: args.limit]
        return [_record_payload(record) for record in selected]
    if args.command == "owner":
        records = owner_records(result.ledger, args.name)
        if not records:
            raise ValueError(f"No records for owner: {args.name}")
        guardian = next((record.guardian_name for record in records if record.guardian_name), "")
        return _owner_payload(summarize_owner(args.name, records, guardian))
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _emit(_run(parsed_args))
    except (ValueError, ConfigurationError):
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
