"""Raw record, transaction, and ledger balance models."""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ledgerbook.models.enums import PaymentChannel, TransactionType


class RawRecord(BaseModel):
    """One transaction row as delivered by a record source."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    date: str | int | float | None = None
    category: str | None = None
    description: str | None = None
    amount: str | int | float | None = None
    type: str | None = None
    sub_category: str | None = Field(
        default=None,
        validation_alias=AliasChoices("subCategory", "sub_category"),
    )
    quantity: str | int | float | None = Field(
        default=None,
        validation_alias=AliasChoices("quantity", "fuelLiters", "fuel_liters"),
    )
    payment_method: str | None = Field(
        default=None,
        validation_alias=AliasChoices("paymentMethod", "payment_method"),
    )
    note: str | None = None
    timestamp: str | None = None


class Transaction(BaseModel):
    """A normalized, immutable ledger entry."""

    model_config = ConfigDict(frozen=True)

    date: date
    type: TransactionType
    amount: Decimal = Field(ge=0)
    payment_channel: PaymentChannel
    category: str = ""
    sub_category: str | None = None
    description: str = ""
    payment_method: str = ""
    note: str | None = None
    quantity: Decimal | None = None
    source_timestamp: datetime | None = None
    raw_date: str = ""
    raw_amount: str = ""
    amount_coerced: bool = False
    sequence: int = 0

    @field_validator("source_timestamp")
    @classmethod
    def _timestamp_in_utc(cls, value: datetime | None) -> datetime | None:
        # Naive timestamps are taken as UTC so mixed inputs stay comparable.
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def period(self) -> tuple[int, int]:
        return (self.date.year, self.date.month)

    @property
    def signed_amount(self) -> Decimal:
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount


class Rejected(BaseModel):
    """A raw row that could not be admitted into the working set."""

    model_config = ConfigDict(frozen=True)

    sequence: int
    field: str
    reason: str
    raw: dict[str, Any] = Field(default_factory=dict)


class LedgerBalances(BaseModel):
    """Running balances of the two independent payment channels."""

    model_config = ConfigDict(frozen=True)

    account: Decimal = Decimal("0")
    cash: Decimal = Decimal("0")

    @classmethod
    def zero(cls) -> "LedgerBalances":
        return cls()

    @property
    def total(self) -> Decimal:
        return self.account + self.cash
