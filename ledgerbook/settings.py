"""Environment-driven settings for LedgerBook."""

import os
from pathlib import Path

from pydantic import BaseModel

from ledgerbook.engines.matchers import (
    DEFAULT_FUEL_CATEGORY,
    DEFAULT_FUEL_MARKER,
    FuelMatcher,
    vehicle_fuel_matcher,
)


class LedgerSettings(BaseModel):
    source: Path | None = None
    log_level: str = "WARNING"
    fuel_category: str = DEFAULT_FUEL_CATEGORY
    fuel_marker: str = DEFAULT_FUEL_MARKER

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Read LEDGERBOOK_* variables; unset variables keep their defaults."""
        source = os.environ.get("LEDGERBOOK_SOURCE")
        return cls(
            source=Path(source) if source else None,
            log_level=os.environ.get("LEDGERBOOK_LOG_LEVEL", "WARNING").upper(),
            fuel_category=os.environ.get("LEDGERBOOK_FUEL_CATEGORY", DEFAULT_FUEL_CATEGORY),
            fuel_marker=os.environ.get("LEDGERBOOK_FUEL_MARKER", DEFAULT_FUEL_MARKER),
        )

    def fuel_matcher(self) -> FuelMatcher:
        return vehicle_fuel_matcher(self.fuel_category, self.fuel_marker)
