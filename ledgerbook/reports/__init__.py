"""Report generation for LedgerBook."""

from ledgerbook.reports.ledger_report import LedgerReportGenerator
from ledgerbook.reports.period_summary import PeriodSummaryGenerator

__all__ = [
    "LedgerReportGenerator",
    "PeriodSummaryGenerator",
]
