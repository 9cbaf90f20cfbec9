"""Core enums, constants, and record types for the catalog packager.

Enums:
    Stage      -- Pipeline phase (ingest through export). Used as the loguru
                  ``stage`` context and to order the runner.
    MediaKind  -- Audio or image. Every scanned file is exactly one of them.

Records:
    ProductRecord -- One catalog row. Optional columns default to "".
    SkuDirectory  -- A top-level folder under files/.
    MediaFile     -- A scanned file with its derived identity and names.
    OutputRow     -- One row of the exported catalog.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


class Stage(StrEnum):
    INGEST = "ingest"
    SCAN = "scan"
    COLLECT = "collect"
    PACKAGE = "package"
    EXPORT = "export"


STAGE_ORDER: list[Stage] = [
    Stage.INGEST,
    Stage.SCAN,
    Stage.COLLECT,
    Stage.PACKAGE,
    Stage.EXPORT,
]


class MediaKind(StrEnum):
    AUDIO = "audio"
    IMAGE = "image"


AUDIO_EXTENSIONS: frozenset[str] = frozenset({".wav", ".mp3"})
IMAGE_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png"})

# Output layout: zips under EP/, renamed audio under wav/{sku}/
ARCHIVE_DIR_NAME = "EP"
AUDIO_DIR_NAME = "wav"

REQUIRED_COLUMN = "sku"

# Fixed export schema, in column order
EXPORT_COLUMNS: tuple[str, ...] = (
    "title",
    "sku",
    "slug",
    "sku_ep",
    "type",
    "short_description",
    "price",
    "product_categories",
    "product_tags",
    "artists",
    "labels",
    "genres",
    "years",
    "owners",
    "product_visibility",
    "featured_image",
    "download_file_paths",
    "download_file_names",
    "playlist_data",
)

# Free-text columns folded to ASCII on export
TRANSLITERATED_COLUMNS: frozenset[str] = frozenset(
    {
        "title",
        "short_description",
        "artists",
        "labels",
        "genres",
        "owners",
    }
)


def media_kind(filename: str) -> MediaKind | None:
    """Classify a filename by extension. Returns None for anything else."""
    suffix = Path(filename).suffix.lower()
    if suffix in AUDIO_EXTENSIONS:
        return MediaKind.AUDIO
    if suffix in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    return None


def normalize_artists(raw: str | None) -> str:
    """Merge a pipe-delimited artist list into "A and B" form."""
    if raw is None or not raw.strip():
        return ""
    return " and ".join(part.strip() for part in raw.split("|"))


@dataclass(frozen=True)
class ProductRecord:
    """A catalog row.

    Only ``sku`` is required. Every other recognised column is optional and
    defaults to an empty string when the CSV lacks it; unrecognised columns
    are dropped.
    """

    sku: str
    title: str = ""
    slug: str = ""
    sku_ep: str = ""
    type: str = ""
    short_description: str = ""
    price: str = ""
    product_categories: str = ""
    product_tags: str = ""
    artists: str = ""
    labels: str = ""
    genres: str = ""
    years: str = ""
    owners: str = ""
    product_visibility: str = ""
    featured_image: str = ""
    download_file_paths: str = ""
    download_file_names: str = ""
    playlist_data: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, str | None]) -> ProductRecord:
        known = {f.name for f in fields(cls)}
        values = {k: (v or "") for k, v in row.items() if k in known}
        values["sku"] = row.get("sku") or ""
        values["artists"] = normalize_artists(row.get("artists"))
        return cls(**values)


@dataclass(frozen=True)
class SkuDirectory:
    name: str
    path: Path


@dataclass(frozen=True)
class MediaFile:
    """A file found in a SKU directory.

    ``canonical_name`` is the human-readable rename used inside the zip,
    ``slug_name`` the URL-safe rename used under wav/. Both equal ``name``
    for images.
    """

    name: str
    path: Path
    extension: str
    kind: MediaKind
    sku: str
    track_sku: str
    artists: str
    canonical_name: str
    slug_name: str
    track_number: int | None = None

    @property
    def is_audio(self) -> bool:
        return self.kind == MediaKind.AUDIO

    @property
    def is_image(self) -> bool:
        return self.kind == MediaKind.IMAGE

    @property
    def archive_name(self) -> str:
        return self.canonical_name if self.is_audio else self.name

    @property
    def export_name(self) -> str:
        return self.slug_name if self.is_audio else self.name


# SKU directory name -> files in scanner order
Collection = Mapping[str, tuple[MediaFile, ...]]


def freeze_collection(entries: Mapping[str, tuple[MediaFile, ...]]) -> Collection:
    """Wrap a scan result in a read-only mapping."""
    return MappingProxyType(dict(entries))


@dataclass(frozen=True)
class OutputRow:
    """One exported catalog row. Field order matches EXPORT_COLUMNS."""

    title: str = ""
    sku: str = ""
    slug: str = ""
    sku_ep: str = ""
    type: str = ""
    short_description: str = ""
    price: str = ""
    product_categories: str = ""
    product_tags: str = ""
    artists: str = ""
    labels: str = ""
    genres: str = ""
    years: str = ""
    owners: str = ""
    product_visibility: str = ""
    featured_image: str = ""
    download_file_paths: str = ""
    download_file_names: str = ""
    playlist_data: str = ""

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class RunResult:
    """Summary of a completed pipeline run."""

    output_dir: Path
    csv_name: str
    records: list[ProductRecord] = field(default_factory=list)
    collection: Collection = field(default_factory=dict)
    unresolved: list[str] = field(default_factory=list)

    @property
    def csv_path(self) -> Path:
        return self.output_dir / self.csv_name
