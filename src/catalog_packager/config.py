"""Pipeline configuration via pydantic-settings (.env + env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://www.files.aze.digital"

# OS and editor artifacts that never count as catalog content
DEFAULT_IGNORE_PATTERNS: list[str] = [
    ".*",
    "Thumbs.db",
    "ehthumbs.db",
    "ehthumbs_vista.db",
    "[Dd]esktop.ini",
    "Icon\r",
    "*~",
    "*.swp",
    "npm-debug.log",
    "@eaDir",
    "$RECYCLE.BIN",
    "__MACOSX",
]


class PipelineConfig(BaseSettings):
    """All pipeline configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # -- Layout --
    work_dir: Path = Path(".")
    files_dir_name: str = "files"
    catalog_name: str = "products.csv"
    output_prefix: str = "files-data"

    # -- Export --
    base_url: str = DEFAULT_BASE_URL

    # -- Scanning --
    ignore_patterns: list[str] = DEFAULT_IGNORE_PATTERNS

    # -- Behavior --
    verbose: bool = False
    log_level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def files_dir(self) -> Path:
        """Directory holding one folder per SKU."""
        return self.work_dir / self.files_dir_name

    @property
    def catalog_path(self) -> Path:
        """Path to the source catalog CSV."""
        return self.work_dir / self.catalog_name

    def setup_logging(self) -> None:
        """Configure loguru for the pipeline."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<8} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level=self.log_level.upper(),
            filter=_default_extra,
        )

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "pipeline.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )
