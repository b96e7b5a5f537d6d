"""Ledger replay engine: running balances from an ordered transaction log.

There is no stored running balance. Every balance is the result of folding
the chronologically ordered log from zero, one transaction at a time:

    income  -> bucket += amount
    expense -> bucket -= amount

where the bucket is picked by payment channel. The account and cash ledgers
are independent wallets. A negative bucket is reported as-is; no transfer
between channels is ever inferred to cover it.
"""

from collections.abc import Iterable

from ledgerbook.models.enums import PaymentChannel
from ledgerbook.models.transaction import LedgerBalances, Transaction


class LedgerReplayEngine:
    """Pure left fold over ordered transactions producing two balances."""

    def apply(self, balances: LedgerBalances, txn: Transaction) -> LedgerBalances:
        """Apply a single transaction and return the next balance state."""
        delta = txn.signed_amount
        if txn.payment_channel == PaymentChannel.CASH:
            return LedgerBalances(account=balances.account, cash=balances.cash + delta)
        return LedgerBalances(account=balances.account + delta, cash=balances.cash)

    def replay(
        self,
        ordered: Iterable[Transaction],
        opening: LedgerBalances | None = None,
    ) -> LedgerBalances:
        """Fold ordered transactions on top of an opening state (zero by default).

        The caller is responsible for ordering; see engines.sorter.
        """
        balances = opening if opening is not None else LedgerBalances.zero()
        for txn in ordered:
            balances = self.apply(balances, txn)
        return balances
