"""Chronological ordering of normalized transactions."""

from collections.abc import Iterable
from datetime import date, datetime, timezone

from ledgerbook.models.transaction import Transaction

_NO_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


def chronological_key(txn: Transaction) -> tuple[date, bool, datetime, int]:
    """Total order key: calendar date, then source timestamp, then ingestion order.

    Within one day, rows without a timestamp sort ahead of timestamped rows.
    The date always dominates, so a timestamp never moves a row across days.
    """
    has_timestamp = txn.source_timestamp is not None
    return (
        txn.date,
        has_timestamp,
        txn.source_timestamp or _NO_TIMESTAMP,
        txn.sequence,
    )


def sort_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return a new list in deterministic chronological order."""
    return sorted(transactions, key=chronological_key)


def recency_key(txn: Transaction) -> tuple[bool, datetime, date, int]:
    """Entry-time key: source timestamp first, then calendar date, then ingestion order.

    Sorted descending, timestamped rows lead and a backdated row entered
    recently still counts as recent.
    """
    has_timestamp = txn.source_timestamp is not None
    return (
        has_timestamp,
        txn.source_timestamp or _NO_TIMESTAMP,
        txn.date,
        txn.sequence,
    )
