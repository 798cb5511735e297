"""CLI utilities."""

from pathlib import Path

import click

from jlcov.config.loader import load_config
from jlcov.config.models import JlcovConfig
from jlcov.core.errors import JlcovError
from jlcov.coverage import lcov
from jlcov.coverage.models import FileCoverage


def get_config(ctx: click.Context) -> JlcovConfig:
    """Config loaded by the root command, or loaded now for direct invocation."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        try:
            obj["config"] = load_config()
        except JlcovError as e:
            raise click.ClickException(str(e)) from e
    config: JlcovConfig = obj["config"]
    return config


def read_traces(paths: tuple[Path, ...], suffix: str) -> list[list[FileCoverage]]:
    """Read each trace file, or every trace below each folder."""
    collections = []
    for path in paths:
        if path.is_dir():
            collections.append(lcov.readfolder(path, suffix=suffix))
        else:
            collections.append(lcov.readfile(path))
    return collections


def format_percent(covered: int, total: int) -> str:
    if total == 0:
        return "n/a"
    return f"{100.0 * covered / total:.2f}%"


def format_summary(covered: int, total: int) -> str:
    return f"Covered {covered}/{total} lines ({format_percent(covered, total)})"
