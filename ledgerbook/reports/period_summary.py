"""Monthly balance summary report generator."""

from ledgerbook.models.reports import PeriodResult
from ledgerbook.reports.formatting import build_environment


class PeriodSummaryGenerator:
    """Renders opening/closing balances and period statistics as text."""

    def __init__(self) -> None:
        self.env = build_environment()

    def render(self, result: PeriodResult) -> str:
        template = self.env.get_template("period_summary.txt")
        return template.render(res=result)
