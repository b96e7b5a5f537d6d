"""Tests for the record normalizer."""

import unicodedata
from datetime import date
from decimal import Decimal

import pytest

from ledgerbook.exceptions import UnparseableAmountError
from ledgerbook.models.enums import PaymentChannel, TransactionType
from ledgerbook.models.transaction import RawRecord, Rejected, Transaction
from ledgerbook.normalization.records import RecordNormalizer, parse_amount


class TestParseAmount:
    def test_thousands_separators(self):
        assert parse_amount("1,000,000") == Decimal("1000000")

    def test_whitespace_stripped(self):
        assert parse_amount(" 2 500 ") == Decimal("2500")

    def test_numbers(self):
        assert parse_amount(1500) == Decimal("1500")
        assert parse_amount(12.5) == Decimal("12.5")

    @pytest.mark.parametrize("raw", ["abc", "", "-5", "NaN", "Infinity", True])
    def test_unparseable(self, raw):
        with pytest.raises(UnparseableAmountError):
            parse_amount(raw)


class TestTypeAndChannel:
    def setup_method(self):
        self.normalizer = RecordNormalizer()

    @pytest.mark.parametrize("raw", ["income", "INCOME ", "Thu nhập", "thu"])
    def test_income_synonyms(self, raw):
        assert self.normalizer.resolve_type(raw) == TransactionType.INCOME

    @pytest.mark.parametrize("raw", ["expense", "chi", "", None, "refund"])
    def test_everything_else_is_expense(self, raw):
        assert self.normalizer.resolve_type(raw) == TransactionType.EXPENSE

    @pytest.mark.parametrize("raw", ["cash", "Cash", "Tiền mặt", "tien mat", "petty cash"])
    def test_cash_synonyms(self, raw):
        assert self.normalizer.resolve_channel(raw) == PaymentChannel.CASH

    def test_decomposed_unicode_cash_label(self):
        assert self.normalizer.resolve_channel(unicodedata.normalize("NFD", "Tiền mặt")) == PaymentChannel.CASH

    @pytest.mark.parametrize("raw", ["transfer", "Chuyển khoản", "card", "", None, "???"])
    def test_unknown_methods_stay_on_account(self, raw):
        assert self.normalizer.resolve_channel(raw) == PaymentChannel.ACCOUNT

    @pytest.mark.parametrize("raw,known", [("Income", True), ("chi tiêu", True), ("EXPENSE", True),
                                           ("incme", False), ("", False), (None, False)])
    def test_is_known_type(self, raw, known):
        assert self.normalizer.is_known_type(raw) is known

    def test_custom_synonym_tables(self):
        normalizer = RecordNormalizer(income_synonyms=["salary"], cash_markers=["wallet"])
        assert normalizer.resolve_type("Salary") == TransactionType.INCOME
        assert normalizer.resolve_type("income") == TransactionType.EXPENSE
        assert normalizer.resolve_channel("Wallet") == PaymentChannel.CASH
        assert normalizer.resolve_channel("cash") == PaymentChannel.ACCOUNT


class TestNormalize:
    def setup_method(self):
        self.normalizer = RecordNormalizer()

    def test_full_row(self, make_row):
        row = make_row(
            date="15/05/2025",
            amount="200,000",
            type="expense",
            payment_method="Tiền mặt",
            category="Chi phí xe",
            subCategory="Xăng",
            quantity="3.5",
            description="Đổ xăng",
            note="full tank",
            timestamp="2025-05-15T09:00:00Z",
        )
        txn = self.normalizer.normalize(row, sequence=7)

        assert isinstance(txn, Transaction)
        assert txn.date == date(2025, 5, 15)
        assert txn.type == TransactionType.EXPENSE
        assert txn.amount == Decimal("200000")
        assert txn.payment_channel == PaymentChannel.CASH
        assert txn.payment_method == "Tiền mặt"
        assert txn.category == "Chi phí xe"
        assert txn.sub_category == "Xăng"
        assert txn.quantity == Decimal("3.5")
        assert txn.description == "Đổ xăng"
        assert txn.note == "full tank"
        assert txn.source_timestamp is not None
        assert txn.raw_date == "15/05/2025"
        assert txn.raw_amount == "200,000"
        assert txn.sequence == 7
        assert txn.amount_coerced is False

    def test_fuel_liters_alias(self, make_row):
        txn = self.normalizer.normalize(make_row(fuelLiters="4"))
        assert txn.quantity == Decimal("4")

    def test_accepts_raw_record_model(self):
        record = RawRecord(date="2025-05-01", amount="10", type="income")
        txn = self.normalizer.normalize(record)
        assert isinstance(txn, Transaction)
        assert txn.type == TransactionType.INCOME

    def test_unparseable_amount_kept_as_zero(self, make_row):
        txn = self.normalizer.normalize(make_row(amount="abc"))
        assert isinstance(txn, Transaction)
        assert txn.amount == Decimal("0")
        assert txn.amount_coerced is True
        assert txn.raw_amount == "abc"

    def test_empty_amount_cell_kept_as_zero(self, make_row):
        txn = self.normalizer.normalize(make_row(amount=""))
        assert isinstance(txn, Transaction)
        assert txn.amount == Decimal("0")
        assert txn.amount_coerced is True

    def test_negative_amount_kept_as_zero(self, make_row):
        txn = self.normalizer.normalize(make_row(amount="-500"))
        assert txn.amount == Decimal("0")
        assert txn.amount_coerced is True

    def test_missing_amount_field_rejected(self):
        outcome = self.normalizer.normalize({"date": "01/05/2025", "type": "expense"}, sequence=3)
        assert isinstance(outcome, Rejected)
        assert outcome.field == "amount"
        assert outcome.sequence == 3

    def test_unparseable_date_rejected(self, make_row):
        outcome = self.normalizer.normalize(make_row(date="someday"))
        assert isinstance(outcome, Rejected)
        assert outcome.field == "date"
        assert outcome.raw["date"] == "someday"

    def test_missing_date_rejected(self):
        outcome = self.normalizer.normalize({"amount": "100", "type": "income"})
        assert isinstance(outcome, Rejected)
        assert outcome.field == "date"

    def test_non_mapping_row_rejected(self):
        outcome = self.normalizer.normalize(["01/05/2025", "100"])
        assert isinstance(outcome, Rejected)
        assert outcome.field == "row"

    def test_malformed_field_type_rejected(self, make_row):
        outcome = self.normalizer.normalize(make_row(category={"nested": True}))
        assert isinstance(outcome, Rejected)
        assert outcome.field == "row"

    def test_optional_fields_default(self):
        txn = self.normalizer.normalize({"date": "01/05/2025", "amount": "5"})
        assert txn.category == ""
        assert txn.sub_category is None
        assert txn.note is None
        assert txn.quantity is None
        assert txn.source_timestamp is None
        assert txn.payment_channel == PaymentChannel.ACCOUNT
        assert txn.type == TransactionType.EXPENSE

    def test_bad_quantity_is_none(self, make_row):
        assert self.normalizer.normalize(make_row(quantity="a lot")).quantity is None

    def test_deterministic(self, make_row):
        row = make_row(date="45762", amount="1,234", timestamp="2025-04-15T10:00:00Z")
        assert self.normalizer.normalize(row, 2) == self.normalizer.normalize(row, 2)
        bad = make_row(date="never")
        assert self.normalizer.normalize(bad, 4) == self.normalizer.normalize(bad, 4)

    def test_transaction_is_immutable(self, make_row):
        txn = self.normalizer.normalize(make_row())
        with pytest.raises(Exception):
            txn.amount = Decimal("1")


class TestNormalizeAll:
    def test_splits_admitted_and_rejected(self, make_row):
        rows = [
            make_row(date="01/05/2025"),
            make_row(date="bad"),
            make_row(date="02/05/2025", amount="abc"),
        ]
        result = RecordNormalizer().normalize_all(rows)

        assert [t.sequence for t in result.transactions] == [0, 2]
        assert [r.sequence for r in result.rejected] == [1]
        assert [t.sequence for t in result.coerced] == [2]

    def test_empty_input(self):
        result = RecordNormalizer().normalize_all([])
        assert result.transactions == []
        assert result.rejected == []
