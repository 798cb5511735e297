"""jlcov process command - build LCOV from a source folder and .cov files."""

from pathlib import Path

import click
from rich.console import Console

from jlcov.cli.utils import format_summary, get_config
from jlcov.core.errors import ParseError
from jlcov.coverage import get_summary, lcov
from jlcov.process import process_folder


@click.command()
@click.argument(
    "folder",
    default="src",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the LCOV trace here instead of stdout",
)
@click.option("--no-amend", is_flag=True, help="Report only what the runtime compiled")
@click.pass_context
def process_command(ctx: click.Context, folder: Path, output: Path | None, no_amend: bool) -> None:
    """Collect coverage for every .jl file below FOLDER (default: src).

    Counts from all matching .cov files are summed per file. Unless
    --no-amend is given, lines inside never-compiled functions are reported
    as uncovered instead of being left out.
    """
    config = get_config(ctx)
    amend = config.amend
    if no_amend:
        amend = amend.model_copy(update={"enabled": False})

    try:
        results = process_folder(folder, amend=amend)
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        lcov.write(click.get_text_stream("stdout"), results)
    else:
        lcov.writefile(output, results)

    console = Console(stderr=True)
    console.print(format_summary(*get_summary(results)), highlight=False)
