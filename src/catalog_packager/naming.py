"""Canonical and slug filename derivation."""

import re
from pathlib import Path

from loguru import logger
from unidecode import unidecode

from .models import MediaKind, media_kind

log = logger.bind(stage="naming")

_SLUG_UNSAFE = re.compile(r"[^a-zA-Z0-9-]")


def transliterate(text: str) -> str:
    """Fold text to ASCII, mapping diacritics to the nearest Latin letter."""
    return unidecode(text or "")


def format_name(raw_name: str, artists: str, sku: str, slugify: bool = False) -> str:
    """Build the renamed filename for a media file.

    Audio files become ``"{artists} - {stem} - {sku}{ext}"`` with blank parts
    dropped and everything folded to ASCII. With ``slugify`` every character
    outside ``[a-zA-Z0-9-]`` in the name part is replaced with ``-``; the
    extension is kept as-is. Images are never renamed.
    """
    if media_kind(raw_name) != MediaKind.AUDIO:
        return raw_name

    path = Path(raw_name)
    ext = path.suffix
    stem = raw_name[: -len(ext)] if ext else raw_name

    parts = [p for p in (artists, stem, sku) if p.strip()]
    base = transliterate(" - ".join(parts))
    if slugify:
        base = _SLUG_UNSAFE.sub("-", base)

    result = base + ext
    log.debug(f"format_name({raw_name!r}, slugify={slugify}) -> {result!r}")
    return result


def canonical_name(raw_name: str, artists: str, sku: str) -> str:
    return format_name(raw_name, artists, sku)


def slug_name(raw_name: str, artists: str, sku: str) -> str:
    return format_name(raw_name, artists, sku, slugify=True)
