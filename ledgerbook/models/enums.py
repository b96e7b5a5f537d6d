"""Enumerations for LedgerBook."""

from enum import StrEnum


class TransactionType(StrEnum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class PaymentChannel(StrEnum):
    ACCOUNT = "ACCOUNT"
    CASH = "CASH"


class ReportType(StrEnum):
    SUMMARY = "summary"
    CATEGORY = "category"
    MONTHLY = "monthly"
    DETAILED = "detailed"
