"""Ingest stage -- reads the product catalog CSV into ProductRecords.

Cells are limited to the csv module's default field size (131072
characters); a longer cell fails the run with CatalogParseError.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path

from loguru import logger

from ..errors import (
    CatalogParseError,
    CharsetError,
    EmptyCatalogError,
    MissingCatalogError,
    MissingFieldError,
)
from ..models import REQUIRED_COLUMN, ProductRecord
from ..naming import transliterate

log = logger.bind(stage="ingest")


def read_text_utf8(path: Path) -> str:
    """Read a file that must be UTF-8 encoded.

    A leading byte-order mark is accepted and stripped. Raises CharsetError
    for anything that does not decode.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        log.error(f"Failed to read {path}: {exc}")
        raise CatalogParseError(f"Cannot read {path.name}: {exc}") from exc
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        log.error(f"Non UTF-8 charset in {path}: {exc}")
        raise CharsetError(f"{path.name} is not UTF-8 encoded ({exc.reason} at byte {exc.start})") from exc


def read_catalog(path: Path) -> list[ProductRecord]:
    """Parse the catalog CSV.

    Rows with a blank sku are dropped. The sku itself is kept as written so
    stray whitespace fails validation. The artists column is normalized from
    a pipe-delimited list to "A and B".
    """
    if not path.is_file():
        raise MissingCatalogError(f"{path.name} not available")

    text = read_text_utf8(path)
    reader = csv.DictReader(io.StringIO(text))
    try:
        rows = list(reader)
    except csv.Error as exc:
        log.error(f"CSV parse error in {path} near line {reader.line_num}: {exc}")
        raise CatalogParseError(f"{path.name} line {reader.line_num}: {exc}") from exc
    if not rows:
        raise EmptyCatalogError(f"{path.name} has no data rows")

    if REQUIRED_COLUMN not in (reader.fieldnames or []):
        raise MissingFieldError(REQUIRED_COLUMN)

    records: list[ProductRecord] = []
    for line_no, row in enumerate(rows, start=2):
        if not (row.get(REQUIRED_COLUMN) or "").strip():
            log.debug(f"Dropping row {line_no}: blank {REQUIRED_COLUMN}")
            continue
        records.append(ProductRecord.from_row(row))

    if not records:
        raise MissingFieldError(REQUIRED_COLUMN)

    log.info(f"Read {len(records)} of {len(rows)} catalog rows from {path.name}")
    return records


def artist_lookup(records: list[ProductRecord]) -> dict[str, str]:
    """Map each SKU to its artists folded to ASCII."""
    return {record.sku: transliterate(record.artists) for record in records}
