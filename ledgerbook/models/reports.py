"""Report output models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ledgerbook.models.enums import PaymentChannel, ReportType
from ledgerbook.models.transaction import Transaction


class PeriodResult(BaseModel):
    """Opening/closing balances and statistics for one calendar month.

    Values are plain signed Decimals in whole currency units. Serialize with
    ``model_dump(by_alias=True)`` for the camelCase output contract.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    month: int
    year: int
    current_balance: Decimal
    total_expense: Decimal
    beginning_balance: Decimal
    account_remaining: Decimal
    account_expenses: Decimal
    cash_remaining: Decimal
    cash_expenses: Decimal
    total_fuel: Decimal
    total_income: Decimal = Decimal("0")
    account_income: Decimal = Decimal("0")
    cash_income: Decimal = Decimal("0")
    beginning_cash_balance: Decimal = Decimal("0")
    transaction_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0


class TransactionSummary(BaseModel):
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    transaction_count: int


class CategoryTotal(BaseModel):
    category: str
    amount: Decimal


class CategoryBreakdownLine(BaseModel):
    category: str
    amount: Decimal
    count: int
    average: Decimal
    percentage: Decimal


class MonthlyTrend(BaseModel):
    period: str  # YYYY-MM
    income: Decimal
    expense: Decimal
    net: Decimal


class PaymentMethodTotal(BaseModel):
    payment_method: str
    channel: PaymentChannel
    amount: Decimal
    count: int


class LedgerReport(BaseModel):
    """Assembled statistics for one report view."""

    report_type: ReportType
    period_label: str
    summary: TransactionSummary
    category_breakdown: list[CategoryBreakdownLine] = Field(default_factory=list)
    top_expenses: list[Transaction] = Field(default_factory=list)
    monthly_trends: list[MonthlyTrend] = Field(default_factory=list)
    payment_methods: list[PaymentMethodTotal] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
