"""jlcov clean command - delete coverage count files."""

from pathlib import Path

import click

from jlcov.process import clean_folder


@click.command()
@click.argument("folder", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--mem", "include_memfiles", is_flag=True, help="Also delete .mem files")
def clean_command(folder: Path, include_memfiles: bool) -> None:
    """Delete .cov files (and .mem files with --mem) below FOLDER."""
    clean_folder(folder, include_memfiles=include_memfiles)
