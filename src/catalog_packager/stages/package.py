"""Package stage -- copies renamed files to wav/ and builds EP/ zips."""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path
from typing import Iterable

import click
from loguru import logger

from ..errors import ArchiveError, CopyError
from ..models import ARCHIVE_DIR_NAME, AUDIO_DIR_NAME, Collection, MediaFile

log = logger.bind(stage="package")


def create_output_dir(parent: Path, name: str) -> Path:
    """Create the run output directory with its EP/ and wav/ subfolders."""
    output_dir = parent / name
    for d in (output_dir, output_dir / ARCHIVE_DIR_NAME, output_dir / AUDIO_DIR_NAME):
        d.mkdir(parents=True, exist_ok=True)
    log.debug(f"Created output directory {output_dir}")
    return output_dir


def move_file(dest_root: Path, media_file: MediaFile) -> Path:
    """Copy a media file into ``dest_root/wav/{sku}/``.

    Audio files take their slug name, images keep their own. The source is
    left untouched. Raises CopyError on any I/O failure.
    """
    dest_dir = dest_root / AUDIO_DIR_NAME / media_file.sku
    dest_file = dest_dir / media_file.export_name
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(media_file.path, dest_file)
    except OSError as exc:
        log.error(f"Copy failed {media_file.path} -> {dest_file}: {exc}")
        raise CopyError(media_file.path, media_file.sku, str(exc)) from exc

    log.debug(f"Copy {media_file.path} -> {dest_file}")
    return dest_file


def create_zip(dest_root: Path, sku: str, files: Iterable[MediaFile]) -> Path:
    """Write ``dest_root/EP/{sku}.zip`` with every file, in order.

    Audio entries take their canonical name, images keep their own. On any
    failure the partial archive is removed and ArchiveError raised.
    """
    zip_path = dest_root / ARCHIVE_DIR_NAME / f"{sku}.zip"
    current: Path = zip_path
    try:
        with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
            for media_file in files:
                current = media_file.path
                zf.write(media_file.path, arcname=media_file.archive_name)
    except (OSError, zipfile.BadZipFile, ValueError) as exc:
        log.error(f"Archive failed for {sku} at {current}: {exc}")
        zip_path.unlink(missing_ok=True)
        raise ArchiveError(current, sku, str(exc)) from exc

    log.info(f"Created {zip_path}")
    return zip_path


def package_collection(dest_root: Path, collection: Collection) -> list[Path]:
    """Copy and archive every SKU directory in scanner order.

    All files of a SKU are copied before its zip is written.
    """
    archives: list[Path] = []
    for sku, files in collection.items():
        for media_file in files:
            move_file(dest_root, media_file)
            click.echo(f"  Created: {media_file.sku}/{media_file.export_name}")
        archives.append(create_zip(dest_root, sku, files))
        click.echo(f"  Zipped: {ARCHIVE_DIR_NAME}/{sku}.zip")
    return archives
