"""Statistics report generator (summary, category, monthly, detailed)."""

from ledgerbook.models.reports import LedgerReport
from ledgerbook.reports.formatting import build_environment


class LedgerReportGenerator:
    """Renders a LedgerReport as text."""

    def __init__(self) -> None:
        self.env = build_environment()

    def render(self, report: LedgerReport) -> str:
        template = self.env.get_template("ledger_report.txt")
        return template.render(report=report)
