"""CLI entry point for the catalog packager."""

import os
from pathlib import Path

import click
from loguru import logger

from .config import PipelineConfig
from .errors import PipelineError
from .report import print_failure, print_summary
from .runner import PipelineRunner

log = logger.bind(stage="cli")


def _find_config_file(work_dir: Path) -> Path | None:
    """Look for .env in the working directory or cwd."""
    for candidate in [work_dir / ".env", Path.cwd() / ".env"]:
        if candidate.is_file():
            return candidate
    return None


def _load_env_file(env_file: Path) -> None:
    """Load a shell-style .env file into os.environ (without overriding)."""
    for line in env_file.read_text().splitlines():
        key, sep, value = line.strip().partition("=")
        if not sep or key.startswith("#"):
            continue
        value = value.strip().strip("\"'")
        # CLI > env > file
        os.environ.setdefault(key.strip(), value)


@click.command()
@click.argument(
    "work_dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to .env file.",
)
def main(work_dir: str, verbose: bool, config_file: str | None) -> None:
    """Package files/ and products.csv into zips, renamed audio and a new catalog."""
    root = Path(work_dir).resolve()

    # Load .env into environment before PipelineConfig reads env vars
    env_file = Path(config_file) if config_file else _find_config_file(root)
    if env_file and env_file.is_file():
        _load_env_file(env_file)

    config_kwargs: dict[str, bool | str | Path] = {
        "work_dir": root,
        "verbose": verbose,
    }
    if verbose:
        config_kwargs["log_level"] = "DEBUG"

    config = PipelineConfig(_env_file=None, **config_kwargs)  # type: ignore[arg-type]
    config.setup_logging()
    if env_file:
        log.debug(f"Loaded env from {env_file}")

    click.echo(f"Start build: {root}")
    try:
        runner = PipelineRunner(config)
        result = runner.run()
    except PipelineError as e:
        log.debug(f"Run failed: {e!r}")
        print_failure(e)
        raise SystemExit(1)

    print_summary(result)
