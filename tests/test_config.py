"""Tests for config.py -- defaults, env var overrides."""

from pathlib import Path

import pytest

from catalog_packager.config import DEFAULT_BASE_URL, DEFAULT_IGNORE_PATTERNS, PipelineConfig

# Env vars that pydantic-settings reads -- must be cleaned for default tests
_CONFIG_ENV_VARS = [
    "WORK_DIR", "FILES_DIR_NAME", "CATALOG_NAME", "OUTPUT_PREFIX", "BASE_URL",
    "IGNORE_PATTERNS", "VERBOSE", "LOG_LEVEL", "LOG_DIR",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove pipeline env vars so defaults tests see actual defaults."""
    for var in _CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_default_values(self):
        config = PipelineConfig(_env_file=None)
        assert config.files_dir_name == "files"
        assert config.catalog_name == "products.csv"
        assert config.output_prefix == "files-data"
        assert config.base_url == DEFAULT_BASE_URL
        assert config.verbose is False
        assert config.log_level == "INFO"
        assert config.log_dir is None

    def test_default_paths(self):
        config = PipelineConfig(_env_file=None, work_dir=Path("/data/label"))
        assert config.files_dir == Path("/data/label/files")
        assert config.catalog_path == Path("/data/label/products.csv")

    def test_default_ignore_patterns(self):
        config = PipelineConfig(_env_file=None)
        assert config.ignore_patterns == DEFAULT_IGNORE_PATTERNS
        assert ".*" in config.ignore_patterns
        assert "Thumbs.db" in config.ignore_patterns


class TestOverrides:
    def test_constructor_override(self):
        config = PipelineConfig(_env_file=None, catalog_name="catalog.csv", verbose=True)
        assert config.catalog_name == "catalog.csv"
        assert config.verbose is True

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("BASE_URL", "https://cdn.example.com")
        monkeypatch.setenv("VERBOSE", "true")
        config = PipelineConfig(_env_file=None)
        assert config.base_url == "https://cdn.example.com"
        assert config.verbose is True

    def test_path_from_env(self, monkeypatch):
        monkeypatch.setenv("WORK_DIR", "/tmp/test-work")
        config = PipelineConfig(_env_file=None)
        assert config.work_dir == Path("/tmp/test-work")

    def test_ignore_patterns_from_env_json(self, monkeypatch):
        monkeypatch.setenv("IGNORE_PATTERNS", '["*.bak", ".*"]')
        config = PipelineConfig(_env_file=None)
        assert config.ignore_patterns == ["*.bak", ".*"]

    def test_base_url_trailing_slash_stripped(self):
        config = PipelineConfig(_env_file=None, base_url="https://cdn.example.com/ ")
        assert config.base_url == "https://cdn.example.com"
