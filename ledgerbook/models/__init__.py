"""Data models for LedgerBook."""

from ledgerbook.models.enums import PaymentChannel, ReportType, TransactionType
from ledgerbook.models.reports import (
    CategoryBreakdownLine,
    CategoryTotal,
    LedgerReport,
    MonthlyTrend,
    PaymentMethodTotal,
    PeriodResult,
    TransactionSummary,
)
from ledgerbook.models.transaction import LedgerBalances, RawRecord, Rejected, Transaction

__all__ = [
    "CategoryBreakdownLine",
    "CategoryTotal",
    "LedgerBalances",
    "LedgerReport",
    "MonthlyTrend",
    "PaymentChannel",
    "PaymentMethodTotal",
    "PeriodResult",
    "RawRecord",
    "Rejected",
    "ReportType",
    "Transaction",
    "TransactionSummary",
    "TransactionType",
]
