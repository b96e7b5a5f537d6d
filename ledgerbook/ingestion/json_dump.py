"""JSON dump of the transaction log."""

import json
import logging
from pathlib import Path
from typing import Any

from ledgerbook.exceptions import RecordSourceError
from ledgerbook.ingestion.base import BaseRecordSource

logger = logging.getLogger(__name__)


class JsonRecordSource(BaseRecordSource):
    """Reads rows from a JSON list, or an object with a ``transactions`` list."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    def fetch_rows(self) -> list[dict[str, Any]]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RecordSourceError(self.name, str(exc)) from exc

        if isinstance(raw, dict):
            raw = raw.get("transactions")
        if not isinstance(raw, list):
            raise RecordSourceError(
                self.name, "expected a list of rows or an object with a 'transactions' list"
            )

        # Non-object entries are passed through; the normalizer rejects them.
        logger.info("Read %d row(s) from %s", len(raw), self.path)
        return raw
