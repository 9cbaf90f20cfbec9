"""Scan stage -- lists SKU directories and builds the media collection.

Each audio file is matched to the catalog by track SKU: a leading numeric
token in the filename ("3 Song.wav") makes the file ``{sku}_3``. Artists are
looked up by track SKU first, then by the directory SKU.
"""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Mapping

import click
from loguru import logger

from ..errors import DirectoryScanEmptyError, MissingInputDirectoryError
from ..models import (
    Collection,
    MediaFile,
    MediaKind,
    SkuDirectory,
    freeze_collection,
    media_kind,
)
from ..naming import canonical_name, slug_name

log = logger.bind(stage="scan")


def _natural_sort_key(p: Path) -> list:
    """Extract numeric/text parts for natural sorting of filenames."""
    return [int(c) if c.isdigit() else c.lower() for c in re.split(r"(\d+)", p.name)]


def is_junk(name: str, patterns: Iterable[str]) -> bool:
    """True when a filename matches one of the ignore patterns."""
    return any(fnmatchcase(name, pattern) for pattern in patterns)


def parse_track_number(filename: str) -> int | None:
    """Parse the leading whitespace-delimited track index of a filename.

    "01 Intro.wav" -> 1. Returns None when the first token is not a number
    or is zero.
    """
    token = filename.split(maxsplit=1)[0] if filename.strip() else ""
    if not token.isascii() or not token.isdigit():
        return None
    return int(token) or None


def is_missing_or_empty(root: Path) -> bool:
    """True when the input directory does not exist or has no entries."""
    if not root.is_dir():
        return True
    return not any(root.iterdir())


def list_sku_dirs(root: Path, ignore_patterns: Iterable[str]) -> list[SkuDirectory]:
    """List the SKU directories directly under root, sorted by name."""
    patterns = list(ignore_patterns)
    if is_missing_or_empty(root):
        raise MissingInputDirectoryError(f"{root.name} doesn't exist or is empty")

    dirs = [
        SkuDirectory(name=entry.name, path=entry)
        for entry in sorted(root.iterdir(), key=lambda p: p.name)
        if not is_junk(entry.name, patterns) and entry.is_dir()
    ]
    if not dirs:
        raise DirectoryScanEmptyError(f"No sku directories in {root}")

    log.debug(f"Found {len(dirs)} sku directories in {root}")
    return dirs


def build_media_file(
    path: Path,
    sku: str,
    kind: MediaKind,
    artists_by_sku: Mapping[str, str],
) -> MediaFile:
    """Derive identity and renamed filenames for one file of a SKU directory."""
    name = path.name
    track_number = parse_track_number(name) if kind == MediaKind.AUDIO else None
    track_sku = f"{sku}_{track_number}" if track_number else sku

    if kind == MediaKind.AUDIO and track_sku in artists_by_sku:
        artists = artists_by_sku[track_sku]
    else:
        artists = artists_by_sku.get(sku, "")

    return MediaFile(
        name=name,
        path=path,
        extension=path.suffix,
        kind=kind,
        sku=sku,
        track_sku=track_sku,
        artists=artists,
        canonical_name=canonical_name(name, artists, sku),
        slug_name=slug_name(name, artists, sku),
        track_number=track_number,
    )


def list_media_files(
    directory: SkuDirectory,
    artists_by_sku: Mapping[str, str],
    ignore_patterns: Iterable[str],
) -> tuple[MediaFile, ...]:
    """List the audio and image files of one SKU directory.

    Junk files and unsupported extensions are skipped. Files come back in
    natural filename order.
    """
    patterns = list(ignore_patterns)
    files: list[MediaFile] = []
    for entry in sorted(directory.path.iterdir(), key=_natural_sort_key):
        if is_junk(entry.name, patterns) or not entry.is_file():
            continue
        kind = media_kind(entry.name)
        if kind is None:
            log.debug(f"Skipping unsupported file: {directory.name}/{entry.name}")
            continue
        files.append(build_media_file(entry, directory.name, kind, artists_by_sku))
    return tuple(files)


def build_collection(
    dirs: Iterable[SkuDirectory],
    artists_by_sku: Mapping[str, str],
    ignore_patterns: Iterable[str],
) -> Collection:
    """Scan every SKU directory and return the read-only collection.

    Directories without media are left out with a warning. Raises
    DirectoryScanEmptyError when nothing remains.
    """
    patterns = list(ignore_patterns)
    entries: dict[str, tuple[MediaFile, ...]] = {}
    for directory in dirs:
        files = list_media_files(directory, artists_by_sku, patterns)
        if files:
            entries[directory.name] = files
            click.echo(f"  SCAN: {directory.name}, {len(files)} files")
        else:
            log.warning(f"{directory.name} is empty")

    if not entries:
        raise DirectoryScanEmptyError("All sku directories are empty")

    log.info(f"Collected {len(entries)} sku directories")
    return freeze_collection(entries)
