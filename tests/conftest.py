"""Shared test fixtures for LedgerBook."""

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pytest

from ledgerbook.engines.aggregator import PeriodAggregator
from ledgerbook.models.enums import PaymentChannel, TransactionType
from ledgerbook.models.transaction import Transaction


@pytest.fixture
def make_row() -> Callable[..., dict[str, Any]]:
    """Build a raw sheet row; keyword arguments override or add fields."""

    def _make(
        date: Any = "01/05/2025",
        amount: Any = "100,000",
        type: str = "expense",
        payment_method: str | None = "transfer",
        **extra: Any,
    ) -> dict[str, Any]:
        row: dict[str, Any] = {
            "date": date,
            "category": "Ăn uống",
            "description": "",
            "amount": amount,
            "type": type,
            "paymentMethod": payment_method,
        }
        row.update(extra)
        return row

    return _make


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Build a normalized transaction directly."""

    def _make(
        on: date = date(2025, 5, 1),
        amount: str = "100",
        txn_type: TransactionType = TransactionType.EXPENSE,
        channel: PaymentChannel = PaymentChannel.ACCOUNT,
        sequence: int = 0,
        timestamp: datetime | None = None,
        **extra: Any,
    ) -> Transaction:
        return Transaction(
            date=on,
            type=txn_type,
            amount=Decimal(amount),
            payment_channel=channel,
            sequence=sequence,
            source_timestamp=timestamp,
            **extra,
        )

    return _make


@pytest.fixture
def may_cash_rows() -> list[dict[str, Any]]:
    """Cash income on the 1st and a cash expense mid-month, May 2025."""
    return [
        {"date": "01/05/2025", "amount": "1,000,000", "type": "income", "paymentMethod": "cash"},
        {"date": "15/05/2025", "amount": "200,000", "type": "expense", "paymentMethod": "cash"},
    ]


@pytest.fixture
def aggregator() -> PeriodAggregator:
    return PeriodAggregator()
