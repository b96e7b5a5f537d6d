"""Record normalization: raw sheet rows into immutable transactions.

Leniency differs by field. An unresolvable date drops the record; an
unparseable amount is kept as zero. Historical totals depend on this
asymmetry, so changing either policy is a data migration.
"""

import re
import unicodedata
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from ledgerbook.exceptions import UnparseableAmountError, UnparseableDateError
from ledgerbook.models.enums import PaymentChannel, TransactionType
from ledgerbook.models.transaction import RawRecord, Rejected, Transaction
from ledgerbook.normalization.dates import parse_timestamp, parse_transaction_date

INCOME_SYNONYMS: frozenset[str] = frozenset({"income", "thu", "thu nhập", "thu nhap"})
EXPENSE_SYNONYMS: frozenset[str] = frozenset({"expense", "chi", "chi tiêu", "chi tieu"})
CASH_MARKERS: tuple[str, ...] = ("cash", "tiền mặt", "tien mat")

_AMOUNT_NOISE_RE = re.compile(r"[,\s]")


@dataclass
class NormalizationResult:
    """Admitted transactions plus the rows that were dropped."""

    transactions: list[Transaction] = field(default_factory=list)
    rejected: list[Rejected] = field(default_factory=list)

    @property
    def coerced(self) -> list[Transaction]:
        return [txn for txn in self.transactions if txn.amount_coerced]


def parse_amount(raw: str | int | float | Decimal) -> Decimal:
    """Parse an amount cell as a finite, non-negative Decimal.

    Thousands separators (commas) and whitespace are stripped first.

    Raises:
        UnparseableAmountError: the cleaned value is not a number, or is
            negative, NaN, or infinite.
    """
    if isinstance(raw, bool):
        raise UnparseableAmountError(raw)
    text = _AMOUNT_NOISE_RE.sub("", str(raw))
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise UnparseableAmountError(raw) from exc
    if not value.is_finite() or value < 0:
        raise UnparseableAmountError(raw)
    return value


def _fold(text: str | None) -> str:
    return unicodedata.normalize("NFC", (text or "").strip()).casefold()


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _optional_text(value: Any) -> str | None:
    return _text(value) or None


class RecordNormalizer:
    """Converts heterogeneous raw rows into canonical Transaction values."""

    def __init__(
        self,
        income_synonyms: Iterable[str] = INCOME_SYNONYMS,
        cash_markers: Iterable[str] = CASH_MARKERS,
        expense_synonyms: Iterable[str] = EXPENSE_SYNONYMS,
    ) -> None:
        self.income_synonyms = frozenset(_fold(s) for s in income_synonyms)
        self.cash_markers = tuple(_fold(m) for m in cash_markers)
        self.expense_synonyms = frozenset(_fold(s) for s in expense_synonyms)

    def normalize(
        self, raw: RawRecord | Mapping[str, Any], sequence: int = 0
    ) -> Transaction | Rejected:
        """Normalize one raw row. Never raises for bad row content."""
        if isinstance(raw, RawRecord):
            record = raw
        else:
            try:
                record = RawRecord.model_validate(dict(raw))
            except (ValidationError, TypeError, ValueError) as exc:
                return Rejected(
                    sequence=sequence,
                    field="row",
                    reason=f"Malformed row: {exc}",
                    raw=_raw_dict(raw),
                )

        try:
            txn_date = parse_transaction_date(record.date)
        except UnparseableDateError as exc:
            return Rejected(
                sequence=sequence,
                field="date",
                reason=str(exc),
                raw=record.model_dump(),
            )

        if record.amount is None:
            return Rejected(
                sequence=sequence,
                field="amount",
                reason="Missing amount",
                raw=record.model_dump(),
            )
        amount_coerced = False
        try:
            amount = parse_amount(record.amount)
        except UnparseableAmountError:
            amount = Decimal("0")
            amount_coerced = True

        return Transaction(
            date=txn_date,
            type=self.resolve_type(record.type),
            amount=amount,
            payment_channel=self.resolve_channel(record.payment_method),
            category=_text(record.category),
            sub_category=_optional_text(record.sub_category),
            description=_text(record.description),
            payment_method=_text(record.payment_method),
            note=_optional_text(record.note),
            quantity=_parse_quantity(record.quantity),
            source_timestamp=parse_timestamp(record.timestamp),
            raw_date=_text(record.date),
            raw_amount=_text(record.amount),
            amount_coerced=amount_coerced,
            sequence=sequence,
        )

    def normalize_all(
        self, rows: Iterable[RawRecord | Mapping[str, Any]]
    ) -> NormalizationResult:
        """Normalize rows in ingestion order, numbering them from zero."""
        result = NormalizationResult()
        for sequence, raw in enumerate(rows):
            outcome = self.normalize(raw, sequence=sequence)
            if isinstance(outcome, Rejected):
                result.rejected.append(outcome)
            else:
                result.transactions.append(outcome)
        return result

    def resolve_type(self, raw: str | None) -> TransactionType:
        if _fold(raw) in self.income_synonyms:
            return TransactionType.INCOME
        return TransactionType.EXPENSE

    def is_known_type(self, raw: str | None) -> bool:
        """True for labels that name a type explicitly rather than by default."""
        folded = _fold(raw)
        return folded in self.income_synonyms or folded in self.expense_synonyms

    def resolve_channel(self, raw: str | None) -> PaymentChannel:
        # Unknown methods stay on the account ledger so they remain in totals.
        folded = _fold(raw)
        if any(marker in folded for marker in self.cash_markers):
            return PaymentChannel.CASH
        return PaymentChannel.ACCOUNT


def _parse_quantity(raw: str | int | float | None) -> Decimal | None:
    if raw is None or _text(raw) == "":
        return None
    try:
        return parse_amount(raw)
    except UnparseableAmountError:
        return None


def _raw_dict(raw: Any) -> dict[str, Any]:
    try:
        return {str(k): v for k, v in dict(raw).items()}
    except (TypeError, ValueError):
        return {"value": repr(raw)}
