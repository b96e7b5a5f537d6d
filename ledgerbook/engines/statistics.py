"""Descriptive statistics over normalized transactions.

Dashboard and report views: totals, category breakdowns, monthly trends and
payment-method splits. Balances are not computed here; see the aggregator.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from ledgerbook.engines.aggregator import validate_period
from ledgerbook.engines.sorter import recency_key, sort_transactions
from ledgerbook.models.enums import PaymentChannel, ReportType, TransactionType
from ledgerbook.models.reports import (
    CategoryBreakdownLine,
    CategoryTotal,
    LedgerReport,
    MonthlyTrend,
    PaymentMethodTotal,
    TransactionSummary,
)
from ledgerbook.models.transaction import Transaction

_CENT = Decimal("0.01")
UNSPECIFIED_METHOD = "unspecified"


def _expenses(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [txn for txn in transactions if txn.type == TransactionType.EXPENSE]


class StatisticsEngine:
    """Summaries and breakdowns for dashboards and reports."""

    def summarize(self, transactions: Iterable[Transaction]) -> TransactionSummary:
        total_income = Decimal("0")
        total_expense = Decimal("0")
        count = 0
        for txn in transactions:
            count += 1
            if txn.type == TransactionType.INCOME:
                total_income += txn.amount
            else:
                total_expense += txn.amount
        return TransactionSummary(
            total_income=total_income,
            total_expense=total_expense,
            balance=total_income - total_expense,
            transaction_count=count,
        )

    def top_expense_categories(
        self, transactions: Iterable[Transaction], limit: int = 5
    ) -> list[CategoryTotal]:
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for txn in _expenses(transactions):
            totals[txn.category] += txn.amount
        ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
        return [CategoryTotal(category=name, amount=amount) for name, amount in ranked[:limit]]

    def category_breakdown(self, transactions: Iterable[Transaction]) -> list[CategoryBreakdownLine]:
        """Expense amount, count, average and share of total expense per category."""
        amounts: dict[str, Decimal] = defaultdict(Decimal)
        counts: dict[str, int] = defaultdict(int)
        for txn in _expenses(transactions):
            amounts[txn.category] += txn.amount
            counts[txn.category] += 1

        total = sum(amounts.values(), Decimal("0"))
        lines = []
        for category, amount in sorted(amounts.items(), key=lambda item: (-item[1], item[0])):
            count = counts[category]
            percentage = (amount / total * 100) if total > 0 else Decimal("0")
            lines.append(
                CategoryBreakdownLine(
                    category=category,
                    amount=amount,
                    count=count,
                    average=(amount / count).quantize(_CENT, rounding=ROUND_HALF_UP),
                    percentage=percentage.quantize(_CENT, rounding=ROUND_HALF_UP),
                )
            )
        return lines

    def top_expenses(self, transactions: Iterable[Transaction], limit: int = 10) -> list[Transaction]:
        ordered = sort_transactions(_expenses(transactions))
        # Stable sort keeps chronological order among equal amounts.
        return sorted(ordered, key=lambda txn: txn.amount, reverse=True)[:limit]

    def recent_transactions(self, transactions: Iterable[Transaction], limit: int = 5) -> list[Transaction]:
        return sorted(transactions, key=recency_key, reverse=True)[:limit]

    def filter_transactions(
        self,
        transactions: Iterable[Transaction],
        txn_type: TransactionType | None = None,
        category: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Transaction]:
        """Filter by type, exact category and inclusive date range; newest first."""
        selected = [
            txn
            for txn in transactions
            if (txn_type is None or txn.type == txn_type)
            and (category is None or txn.category == category)
            and (start is None or txn.date >= start)
            and (end is None or txn.date <= end)
        ]
        return list(reversed(sort_transactions(selected)))

    def monthly_trends(self, transactions: Iterable[Transaction]) -> list[MonthlyTrend]:
        income: dict[tuple[int, int], Decimal] = defaultdict(Decimal)
        expense: dict[tuple[int, int], Decimal] = defaultdict(Decimal)
        for txn in transactions:
            if txn.type == TransactionType.INCOME:
                income[txn.period] += txn.amount
            else:
                expense[txn.period] += txn.amount

        trends = []
        for year, month in sorted(set(income) | set(expense)):
            period_income = income.get((year, month), Decimal("0"))
            period_expense = expense.get((year, month), Decimal("0"))
            trends.append(
                MonthlyTrend(
                    period=f"{year:04d}-{month:02d}",
                    income=period_income,
                    expense=period_expense,
                    net=period_income - period_expense,
                )
            )
        return trends

    def payment_method_breakdown(self, transactions: Iterable[Transaction]) -> list[PaymentMethodTotal]:
        """Total moved per raw payment-method label, with its resolved channel."""
        amounts: dict[tuple[str, PaymentChannel], Decimal] = defaultdict(Decimal)
        counts: dict[tuple[str, PaymentChannel], int] = defaultdict(int)
        for txn in transactions:
            key = (txn.payment_method or UNSPECIFIED_METHOD, txn.payment_channel)
            amounts[key] += txn.amount
            counts[key] += 1
        return [
            PaymentMethodTotal(payment_method=method, channel=channel, amount=amount, count=counts[(method, channel)])
            for (method, channel), amount in sorted(amounts.items(), key=lambda item: (-item[1], item[0]))
        ]

    def build_report(
        self,
        report_type: ReportType,
        transactions: Iterable[Transaction],
        month: int | None = None,
        year: int | None = None,
    ) -> LedgerReport:
        """Assemble a report view, scoped to a month (both given) or a year."""
        selected = list(transactions)
        if month is not None and year is not None:
            validate_period(month, year)
            selected = [txn for txn in selected if txn.period == (year, month)]
            label = f"{month:02d}/{year}"
        elif year is not None:
            validate_period(1, year)
            selected = [txn for txn in selected if txn.date.year == year]
            label = str(year)
        else:
            label = "All time"

        report = LedgerReport(
            report_type=report_type,
            period_label=label,
            summary=self.summarize(selected),
            category_breakdown=self.category_breakdown(selected),
            top_expenses=self.top_expenses(selected),
        )
        if report_type == ReportType.MONTHLY:
            report.monthly_trends = self.monthly_trends(selected)
        elif report_type == ReportType.DETAILED:
            report.payment_methods = self.payment_method_breakdown(selected)
            report.transactions = self.filter_transactions(selected)
        return report
