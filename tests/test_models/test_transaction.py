"""Tests for core ledger models."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from ledgerbook.models.enums import PaymentChannel, TransactionType
from ledgerbook.models.reports import PeriodResult
from ledgerbook.models.transaction import LedgerBalances, RawRecord, Transaction


class TestTransaction:
    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            Transaction(
                date=date(2025, 5, 1),
                type=TransactionType.EXPENSE,
                amount=Decimal("-1"),
                payment_channel=PaymentChannel.ACCOUNT,
            )

    def test_period_and_signed_amount(self, make_txn):
        income = make_txn(on=date(2025, 12, 31), amount="40", txn_type=TransactionType.INCOME)
        expense = make_txn(amount="15")
        assert income.period == (2025, 12)
        assert income.signed_amount == Decimal("40")
        assert expense.signed_amount == Decimal("-15")


class TestRawRecord:
    def test_camel_case_aliases(self):
        record = RawRecord.model_validate(
            {"date": "01/05/2025", "subCategory": "Xăng", "paymentMethod": "cash", "fuelLiters": 3}
        )
        assert record.sub_category == "Xăng"
        assert record.payment_method == "cash"
        assert record.quantity == 3

    def test_unknown_keys_ignored(self):
        record = RawRecord.model_validate({"date": "x", "receiptLink": "http://example.invalid"})
        assert record.date == "x"

    def test_numeric_text_fields_coerced(self):
        assert RawRecord.model_validate({"category": 42}).category == "42"


class TestLedgerBalances:
    def test_zero_and_total(self):
        assert LedgerBalances.zero().total == Decimal("0")
        assert LedgerBalances(account=Decimal("-5"), cash=Decimal("8")).total == Decimal("3")


class TestPeriodResult:
    def test_populate_by_field_name_and_alias(self):
        values = dict(
            month=5,
            year=2025,
            current_balance=Decimal("1"),
            total_expense=Decimal("0"),
            beginning_balance=Decimal("0"),
            account_remaining=Decimal("0"),
            account_expenses=Decimal("0"),
            cash_remaining=Decimal("1"),
            cash_expenses=Decimal("0"),
            total_fuel=Decimal("0"),
        )
        result = PeriodResult(**values)
        assert result.model_dump(by_alias=True)["cashRemaining"] == Decimal("1")
        assert result.is_empty
