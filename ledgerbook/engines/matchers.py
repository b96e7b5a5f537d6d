"""Fuel-quantity matchers.

The aggregator sums ``quantity`` only for transactions accepted by a matcher.
Matchers are plain predicates so locale-specific labels stay in configuration.
"""

import unicodedata
from collections.abc import Callable

from ledgerbook.models.transaction import Transaction

FuelMatcher = Callable[[Transaction], bool]

DEFAULT_FUEL_CATEGORY = "chi phí xe"
DEFAULT_FUEL_MARKER = "Xăng"


def _fold(text: str | None) -> str:
    return unicodedata.normalize("NFC", (text or "").strip()).casefold()


def vehicle_fuel_matcher(
    category_keyword: str = DEFAULT_FUEL_CATEGORY,
    fuel_marker: str = DEFAULT_FUEL_MARKER,
) -> FuelMatcher:
    """Match vehicle-expense categories carrying the fuel sub-category.

    The category matches when it contains ``category_keyword`` (case-insensitive).
    The sub-category must equal ``fuel_marker`` after trimming.
    """
    keyword = _fold(category_keyword)
    marker = unicodedata.normalize("NFC", fuel_marker.strip())

    def matches(txn: Transaction) -> bool:
        if not keyword or keyword not in _fold(txn.category):
            return False
        sub_category = unicodedata.normalize("NFC", (txn.sub_category or "").strip())
        return sub_category == marker

    return matches


def never_matches(txn: Transaction) -> bool:
    """Matcher that disables fuel tracking."""
    return False
