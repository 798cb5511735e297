"""Fixtures for CLI tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from jlcov.config.models import LoggingConfig, LogOutputConfig
from jlcov.core.logging import configure_logging


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run commands from an empty working directory with logs kept off the console."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    configure_logging(
        config=LoggingConfig(outputs=[LogOutputConfig(destination=str(tmp_path / "cli.log"))])
    )
    with (
        patch("jlcov.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
        patch("jlcov.cli.main.configure_logging"),
    ):
        yield workdir
