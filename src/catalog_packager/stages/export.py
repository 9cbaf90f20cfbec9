"""Export stage -- writes the catalog back out with download paths.

Track rows (``SKU1_2``) point at the slugged audio file under
``wav/{ep_sku}/``; release rows point at ``EP/{ep_sku}.zip``.
"""

from __future__ import annotations

import csv
from dataclasses import asdict
from pathlib import Path
from typing import Iterable

from loguru import logger

from ..models import (
    ARCHIVE_DIR_NAME,
    AUDIO_DIR_NAME,
    EXPORT_COLUMNS,
    TRANSLITERATED_COLUMNS,
    Collection,
    MediaFile,
    OutputRow,
    ProductRecord,
)
from ..naming import transliterate
from ..validation import split_track_sku

log = logger.bind(stage="export")


def find_track_file(collection: Collection, ep_sku: str, sku: str) -> MediaFile | None:
    """Return the audio file of an EP whose track SKU equals sku."""
    for media_file in collection.get(ep_sku, ()):
        if media_file.is_audio and media_file.track_sku == sku:
            return media_file
    return None


def build_row(
    record: ProductRecord,
    collection: Collection,
    base_url: str,
) -> tuple[OutputRow, bool]:
    """Build one export row.

    Returns the row and whether its download fields were resolved. An
    unmatched track keeps the record's own download values.
    """
    values = {
        column: transliterate(value) if column in TRANSLITERATED_COLUMNS else value
        for column, value in asdict(record).items()
    }

    is_track, ep_sku = split_track_sku(record.sku)
    resolved = True
    if is_track:
        media_file = find_track_file(collection, ep_sku, record.sku)
        if media_file is not None:
            values["download_file_paths"] = (
                f"{base_url}/{AUDIO_DIR_NAME}/{ep_sku}/{media_file.slug_name}"
            )
            values["download_file_names"] = media_file.canonical_name
        else:
            resolved = False
            log.warning(f"No audio file for track {record.sku} in {ep_sku}")
    else:
        if ep_sku not in collection:
            log.warning(f"No packaged directory for release {record.sku} ({ep_sku})")
        values["download_file_paths"] = f"{base_url}/{ARCHIVE_DIR_NAME}/{ep_sku}.zip"
        values["download_file_names"] = f"{ep_sku}.zip"

    return OutputRow(**values), resolved


def build_rows(
    records: Iterable[ProductRecord],
    collection: Collection,
    base_url: str,
) -> tuple[list[OutputRow], list[str]]:
    """Build export rows in input order.

    Returns the rows and the track SKUs left without a download path.
    """
    rows: list[OutputRow] = []
    unresolved: list[str] = []
    for record in records:
        row, resolved = build_row(record, collection, base_url)
        rows.append(row)
        if not resolved:
            unresolved.append(record.sku)
    return rows, unresolved


def write_catalog(rows: Iterable[OutputRow], output_dir: Path, timestamp: str) -> str:
    """Write ``products-{timestamp}.csv`` into output_dir and return its name."""
    filename = f"products-{timestamp}.csv"
    path = output_dir / filename
    count = 0
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(EXPORT_COLUMNS), lineterminator="\n")
        writer.writeheader()
        for row in rows:
            writer.writerow(row.as_dict())
            count += 1

    log.info(f"Wrote {count} rows to {path}")
    return filename
