"""Record sources for the transaction log."""

from pathlib import Path

from ledgerbook.exceptions import RecordSourceError
from ledgerbook.ingestion.base import BaseRecordSource
from ledgerbook.ingestion.json_dump import JsonRecordSource
from ledgerbook.ingestion.sheet_csv import SHEET_COLUMNS, SheetCsvSource


def open_source(path: Path, has_header: bool = True) -> BaseRecordSource:
    """Pick a record source for a file by its suffix."""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return SheetCsvSource(path, has_header=has_header)
    if suffix == ".json":
        return JsonRecordSource(path)
    raise RecordSourceError(str(path), f"unsupported file type '{suffix or path}'")


__all__ = [
    "BaseRecordSource",
    "JsonRecordSource",
    "SHEET_COLUMNS",
    "SheetCsvSource",
    "open_source",
]
