"""Console reporting for pipeline failures and run summaries."""

from __future__ import annotations

from typing import Sequence

import click

from .errors import IdentifierError, PipelineError
from .models import RunResult


def print_identifiers(identifiers: Sequence[str], header: str = "Values") -> None:
    """Print identifiers as an indexed two-column table."""
    if not identifiers:
        return
    index_width = max(len("(index)"), len(str(len(identifiers) - 1)))
    value_width = max(len(header), *(len(i) for i in identifiers))
    rule = f"+-{'-' * index_width}-+-{'-' * value_width}-+"

    click.echo(rule)
    click.echo(f"| {'(index)':<{index_width}} | {header:<{value_width}} |")
    click.echo(rule)
    for i, ident in enumerate(identifiers):
        click.echo(f"| {i:<{index_width}} | {ident:<{value_width}} |")
    click.echo(rule)


def print_failure(error: PipelineError) -> None:
    """Report a terminal pipeline error, listing offending identifiers."""
    click.echo(f"Fail - {error}", err=True)
    if isinstance(error, IdentifierError):
        print_identifiers(error.identifiers)


def print_summary(result: RunResult) -> None:
    click.echo(f"\nBuild finished: {result.output_dir}")
    click.echo(f"  Directories packaged: {len(result.collection)}")
    click.echo(f"  Catalog rows: {len(result.records)}")
    click.echo(f"  CSV: {result.csv_name}")

    if result.unresolved:
        click.echo(f"\nTracks without a download file ({len(result.unresolved)})")
        click.echo("-" * 50)
        for sku in result.unresolved:
            click.echo(f"  {sku}")
