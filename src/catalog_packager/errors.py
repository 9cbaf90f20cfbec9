"""Exception hierarchy for the catalog packager.

Every error is terminal for a run: the runner stops at the first failing
phase and the CLI reports the message and exits non-zero.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class PipelineError(Exception):
    """Base exception for all pipeline errors."""


class ConfigError(PipelineError):
    """Invalid or missing configuration."""


# -- Catalog --


class MissingCatalogError(PipelineError):
    """The catalog CSV does not exist."""


class CharsetError(PipelineError):
    """The catalog CSV is not UTF-8 encoded."""


class CatalogParseError(PipelineError):
    """The catalog CSV could not be read or parsed."""


class EmptyCatalogError(PipelineError):
    """The catalog CSV has no data rows."""


class MissingFieldError(PipelineError):
    """A required column is absent or blank on every row."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Required column '{field}' is missing or empty")
        self.field = field


# -- Directory scan --


class NoDirectoriesFoundError(PipelineError):
    """No usable SKU directories."""


class MissingInputDirectoryError(NoDirectoriesFoundError):
    """The input directory does not exist or has no entries."""


class DirectoryScanEmptyError(NoDirectoriesFoundError):
    """Nothing left to process after filtering."""


# -- Identifier validation --


class IdentifierError(PipelineError):
    """Validation failure that names the offending identifiers."""

    def __init__(self, message: str, identifiers: Iterable[str]) -> None:
        super().__init__(message)
        self.identifiers = list(identifiers)


class InvalidSkuError(IdentifierError):
    """Catalog SKUs that break the naming convention."""

    def __init__(self, identifiers: Iterable[str]) -> None:
        super().__init__("Invalid skus", identifiers)


class DuplicateSkuError(IdentifierError):
    """Catalog SKUs that appear more than once."""

    def __init__(self, identifiers: Iterable[str]) -> None:
        super().__init__("Duplicate skus", identifiers)


class InvalidDirectoryNameError(IdentifierError):
    """SKU directories whose names break the naming convention."""

    def __init__(self, identifiers: Iterable[str]) -> None:
        super().__init__("Invalid directory names", identifiers)


# -- Output --


class CopyError(PipelineError):
    """Copying a media file into the output tree failed."""

    def __init__(self, path: Path, sku: str, reason: str) -> None:
        super().__init__(f"Failed to copy {path} (sku {sku}): {reason}")
        self.path = path
        self.sku = sku
        self.reason = reason


class ArchiveError(PipelineError):
    """Building a SKU zip archive failed."""

    def __init__(self, path: Path, sku: str, reason: str) -> None:
        super().__init__(f"Failed to archive {path} (sku {sku}): {reason}")
        self.path = path
        self.sku = sku
        self.reason = reason
