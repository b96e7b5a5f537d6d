"""Ledger reconstruction engines."""

from ledgerbook.engines.aggregator import PeriodAggregator
from ledgerbook.engines.matchers import never_matches, vehicle_fuel_matcher
from ledgerbook.engines.replay import LedgerReplayEngine
from ledgerbook.engines.sorter import sort_transactions
from ledgerbook.engines.statistics import StatisticsEngine

__all__ = [
    "LedgerReplayEngine",
    "PeriodAggregator",
    "StatisticsEngine",
    "never_matches",
    "sort_transactions",
    "vehicle_fuel_matcher",
]
