"""CSV export of the transaction sheet."""

import csv
import logging
from pathlib import Path
from typing import Any

from ledgerbook.exceptions import RecordSourceError
from ledgerbook.ingestion.base import BaseRecordSource

logger = logging.getLogger(__name__)

# Column order of the transaction sheet (A..L).
SHEET_COLUMNS: tuple[str, ...] = (
    "date",
    "category",
    "description",
    "amount",
    "type",
    "receiptLink",
    "timestamp",
    "subCategory",
    "fuelLiters",
    "paymentMethod",
    "note",
    "imageUrl",
)

# Header spellings seen in exports, keyed by lowercase name without separators.
_HEADER_ALIASES: dict[str, str] = {
    "date": "date",
    "category": "category",
    "description": "description",
    "amount": "amount",
    "type": "type",
    "receiptlink": "receiptLink",
    "timestamp": "timestamp",
    "subcategory": "subCategory",
    "fuelliters": "fuelLiters",
    "quantity": "quantity",
    "paymentmethod": "paymentMethod",
    "note": "note",
    "imageurl": "imageUrl",
}


def _canonical_header(name: str) -> str:
    key = name.strip().lower().replace("_", "").replace(" ", "")
    return _HEADER_ALIASES.get(key, name.strip())


def _is_blank(cells: list[Any]) -> bool:
    return all(cell is None or not str(cell).strip() for cell in cells)


class SheetCsvSource(BaseRecordSource):
    """Reads transaction rows from a CSV export of the sheet.

    With ``has_header`` the first row names the columns; otherwise columns are
    taken positionally in SHEET_COLUMNS order. Empty cells are kept as empty
    strings, and cells missing from short rows come back as None.
    """

    def __init__(self, path: Path, has_header: bool = True) -> None:
        self.path = Path(path)
        self.has_header = has_header

    @property
    def name(self) -> str:
        return str(self.path)

    def fetch_rows(self) -> list[dict[str, Any]]:
        try:
            with self.path.open(newline="", encoding="utf-8-sig") as handle:
                rows = list(csv.reader(handle))
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise RecordSourceError(self.name, str(exc)) from exc

        if self.has_header:
            if not rows:
                return []
            columns = [_canonical_header(name) for name in rows[0]]
            body = rows[1:]
        else:
            columns = list(SHEET_COLUMNS)
            body = rows

        records: list[dict[str, Any]] = []
        for cells in body:
            if _is_blank(cells):
                continue
            record: dict[str, Any] = {column: None for column in columns}
            for column, cell in zip(columns, cells):
                record[column] = cell
            records.append(record)

        logger.info("Read %d row(s) from %s", len(records), self.path)
        return records
