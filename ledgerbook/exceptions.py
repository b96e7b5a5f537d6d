"""Custom exceptions for LedgerBook."""


class LedgerError(Exception):
    """Base exception for ledger reconstruction errors."""


class UnparseableDateError(LedgerError):
    """Raised when a transaction date matches none of the supported encodings."""

    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(f"Cannot resolve transaction date: {raw!r}")


class UnparseableAmountError(LedgerError):
    """Raised when a transaction amount is not a finite non-negative number."""

    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(f"Cannot parse transaction amount: {raw!r}")


class RecordSourceError(LedgerError):
    """Raised when the transaction record source cannot be read."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Record source {source} unavailable: {message}")


class InvalidPeriodError(LedgerError):
    """Raised when a period query names an impossible month or year."""

    def __init__(self, month: int, year: int):
        self.month = month
        self.year = year
        super().__init__(f"Invalid period: month={month}, year={year}")
