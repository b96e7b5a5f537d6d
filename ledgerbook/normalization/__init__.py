"""Normalization layer: raw sheet rows into canonical transactions."""

from ledgerbook.normalization.dates import (
    SPREADSHEET_EPOCH,
    parse_timestamp,
    parse_transaction_date,
    serial_to_date,
)
from ledgerbook.normalization.records import NormalizationResult, RecordNormalizer, parse_amount

__all__ = [
    "NormalizationResult",
    "RecordNormalizer",
    "SPREADSHEET_EPOCH",
    "parse_amount",
    "parse_timestamp",
    "parse_transaction_date",
    "serial_to_date",
]
