"""Period aggregator: opening/closing balances and statistics for one month.

The full history is normalized and sorted once, then split around the
requested month by comparing ``(year, month)`` tuples:

    before  = every transaction in an earlier month (any earlier year)
    current = every transaction in the requested month

The opening state is a replay of ``before``; ``current`` is then folded on top
of it with the same rule while period statistics are accumulated. Comparing
tuples keeps January's opening window covering all of the previous December.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import MAXYEAR, MINYEAR
from decimal import Decimal
from typing import Any

from ledgerbook.engines.matchers import FuelMatcher, vehicle_fuel_matcher
from ledgerbook.engines.replay import LedgerReplayEngine
from ledgerbook.engines.sorter import sort_transactions
from ledgerbook.exceptions import InvalidPeriodError
from ledgerbook.ingestion.base import BaseRecordSource
from ledgerbook.models.enums import PaymentChannel, TransactionType
from ledgerbook.models.reports import PeriodResult
from ledgerbook.models.transaction import RawRecord, Transaction
from ledgerbook.normalization.records import RecordNormalizer

logger = logging.getLogger(__name__)


def validate_period(month: int, year: int) -> None:
    if not (1 <= month <= 12 and MINYEAR <= year <= MAXYEAR):
        raise InvalidPeriodError(month, year)


class PeriodAggregator:
    """Computes a PeriodResult from the complete transaction history."""

    def __init__(
        self,
        normalizer: RecordNormalizer | None = None,
        replay_engine: LedgerReplayEngine | None = None,
        fuel_matcher: FuelMatcher | None = None,
    ) -> None:
        self.normalizer = normalizer or RecordNormalizer()
        self.replay_engine = replay_engine or LedgerReplayEngine()
        self.fuel_matcher = fuel_matcher or vehicle_fuel_matcher()

    def aggregate(
        self,
        month: int,
        year: int,
        rows: Iterable[RawRecord | Mapping[str, Any]],
    ) -> PeriodResult:
        """Normalize raw rows and aggregate the requested month.

        Rows with unresolvable dates are dropped and logged; they never abort
        the computation.
        """
        validate_period(month, year)
        normalized = self.normalizer.normalize_all(rows)

        if normalized.rejected:
            logger.warning(
                "Dropped %d record(s) that could not be normalized",
                len(normalized.rejected),
            )
            for rejected in normalized.rejected:
                logger.debug("Row %d rejected (%s): %s", rejected.sequence, rejected.field, rejected.reason)
        coerced = normalized.coerced
        if coerced:
            logger.warning("Kept %d record(s) with unparseable amounts as 0", len(coerced))

        return self.aggregate_transactions(month, year, normalized.transactions)

    def aggregate_from_source(self, month: int, year: int, source: BaseRecordSource) -> PeriodResult:
        """Fetch the full history from a record source and aggregate it.

        RecordSourceError propagates unchanged; no partial result is produced.
        """
        validate_period(month, year)
        rows = source.fetch_rows()
        return self.aggregate(month, year, rows)

    def aggregate_transactions(
        self,
        month: int,
        year: int,
        transactions: Iterable[Transaction],
    ) -> PeriodResult:
        """Aggregate already-normalized transactions for the requested month."""
        validate_period(month, year)
        ordered = sort_transactions(transactions)
        target = (year, month)

        before = [txn for txn in ordered if txn.period < target]
        current = [txn for txn in ordered if txn.period == target]
        logger.debug(
            "Period %02d/%d: %d earlier transaction(s), %d in period",
            month, year, len(before), len(current),
        )

        opening = self.replay_engine.replay(before)
        balances = opening

        account_income = Decimal("0")
        cash_income = Decimal("0")
        account_expenses = Decimal("0")
        cash_expenses = Decimal("0")
        total_fuel = Decimal("0")

        for txn in current:
            balances = self.replay_engine.apply(balances, txn)

            is_cash = txn.payment_channel == PaymentChannel.CASH
            if txn.type == TransactionType.INCOME:
                if is_cash:
                    cash_income += txn.amount
                else:
                    account_income += txn.amount
            elif is_cash:
                cash_expenses += txn.amount
            else:
                account_expenses += txn.amount

            if txn.quantity is not None and self.fuel_matcher(txn):
                total_fuel += txn.quantity

        result = PeriodResult(
            month=month,
            year=year,
            current_balance=balances.account + balances.cash,
            total_expense=account_expenses + cash_expenses,
            beginning_balance=opening.account,
            account_remaining=balances.account,
            account_expenses=account_expenses,
            cash_remaining=balances.cash,
            cash_expenses=cash_expenses,
            total_fuel=total_fuel,
            total_income=account_income + cash_income,
            account_income=account_income,
            cash_income=cash_income,
            beginning_cash_balance=opening.cash,
            transaction_count=len(current),
        )
        logger.info(
            "Period %02d/%d: opening account=%s cash=%s, closing account=%s cash=%s",
            month, year, opening.account, opening.cash, balances.account, balances.cash,
        )
        return result
