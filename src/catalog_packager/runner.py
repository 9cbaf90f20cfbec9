"""Pipeline runner -- orchestrates the catalog packaging phases."""

from __future__ import annotations

from datetime import datetime

import click
from loguru import logger

from .config import PipelineConfig
from .errors import (
    ConfigError,
    DuplicateSkuError,
    InvalidDirectoryNameError,
    InvalidSkuError,
    MissingInputDirectoryError,
)
from .models import STAGE_ORDER, Collection, ProductRecord, RunResult, SkuDirectory
from .stages.export import build_rows, write_catalog
from .stages.ingest import artist_lookup, read_catalog
from .stages.package import create_output_dir, package_collection
from .stages.scan import build_collection, is_missing_or_empty, list_sku_dirs
from .validation import find_duplicates, find_invalid_names

log = logger.bind(stage="runner")


def current_timestamp(now: datetime | None = None) -> str:
    """Format a run timestamp as YYYY-MM-DD-HH-MM-SS-mmm."""
    now = now or datetime.now()
    return f"{now:%Y-%m-%d-%H-%M-%S}-{now.microsecond // 1000:03d}"


class PipelineRunner:
    """Runs the catalog pipeline for one working directory.

    Phases run strictly in order and the first failure stops the run. Output
    already written is left in place.
    """

    def __init__(self, config: PipelineConfig) -> None:
        if not config.base_url:
            raise ConfigError("base_url must not be empty")
        self.config = config

    def run(self, timestamp: str | None = None) -> RunResult:
        """Run ingest, scan, collect, package and export."""
        timestamp = timestamp or current_timestamp()
        log.debug(f"Stages: {' -> '.join(s.value for s in STAGE_ORDER)}")

        files_dir = self.config.files_dir
        if is_missing_or_empty(files_dir):
            raise MissingInputDirectoryError(f"{files_dir.name} doesn't exist or is empty")

        records = self.ingest()
        dirs = self.scan()
        collection = self.collect(dirs, records)

        output_dir = create_output_dir(
            self.config.work_dir, f"{self.config.output_prefix}-{timestamp}"
        )
        click.echo(f"  OUTPUT: {output_dir}")
        package_collection(output_dir, collection)

        rows, unresolved = build_rows(records, collection, self.config.base_url)
        csv_name = write_catalog(rows, output_dir, timestamp)
        click.echo(f"  EXPORT: {csv_name}")

        return RunResult(
            output_dir=output_dir,
            csv_name=csv_name,
            records=records,
            collection=collection,
            unresolved=unresolved,
        )

    def ingest(self) -> list[ProductRecord]:
        """Read the catalog and reject invalid or duplicate SKUs."""
        records = read_catalog(self.config.catalog_path)
        skus = [r.sku for r in records]

        invalid = find_invalid_names(skus)
        if invalid:
            raise InvalidSkuError(invalid)

        duplicates = find_duplicates(skus)
        if duplicates:
            raise DuplicateSkuError(duplicates)

        click.echo(f"  INGEST: {len(records)} records found")
        return records

    def scan(self) -> list[SkuDirectory]:
        """List SKU directories and reject badly named ones."""
        dirs = list_sku_dirs(self.config.files_dir, self.config.ignore_patterns)

        invalid = find_invalid_names(d.name for d in dirs)
        if invalid:
            raise InvalidDirectoryNameError(invalid)

        click.echo(f"  SCAN: {len(dirs)} directories found")
        return dirs

    def collect(
        self,
        dirs: list[SkuDirectory],
        records: list[ProductRecord],
    ) -> Collection:
        """Scan every SKU directory against the catalog artists."""
        return build_collection(dirs, artist_lookup(records), self.config.ignore_patterns)
