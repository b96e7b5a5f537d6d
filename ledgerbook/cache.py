"""In-process result cache wrapped around the period aggregator.

The aggregator itself never caches. This wrapper memoizes PeriodResults keyed
by the query and a fingerprint of the exact input rows, so any change to the
transaction log produces a fresh replay.
"""

import hashlib
import json
import logging
from collections import OrderedDict
from collections.abc import Iterable, Mapping
from typing import Any

from ledgerbook.engines.aggregator import PeriodAggregator
from ledgerbook.models.reports import PeriodResult
from ledgerbook.models.transaction import RawRecord

logger = logging.getLogger(__name__)


def fingerprint_rows(rows: Iterable[RawRecord | Mapping[str, Any]]) -> str:
    """SHA-256 over the canonical JSON of the rows, in order."""
    payload = [
        row.model_dump(mode="json") if isinstance(row, RawRecord) else row
        for row in rows
    ]
    data = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


class CachingAggregator:
    """LRU memoization of ``PeriodAggregator.aggregate``."""

    def __init__(self, aggregator: PeriodAggregator | None = None, maxsize: int = 128) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.aggregator = aggregator or PeriodAggregator()
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[tuple[int, int, str], PeriodResult] = OrderedDict()

    def aggregate(
        self,
        month: int,
        year: int,
        rows: Iterable[RawRecord | Mapping[str, Any]],
    ) -> PeriodResult:
        rows = list(rows)
        key = (month, year, fingerprint_rows(rows))

        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            return cached

        self.misses += 1
        result = self.aggregator.aggregate(month, year, rows)
        self._entries[key] = result
        if len(self._entries) > self.maxsize:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached period %02d/%d", evicted[0], evicted[1])
        return result

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)
