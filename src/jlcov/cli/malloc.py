"""jlcov malloc command - list the heaviest allocation sites."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from jlcov.coverage import analyze_malloc


@click.command()
@click.argument(
    "dirs",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("-n", "--top", default=10, show_default=True, help="Number of sites to show")
def malloc_command(dirs: tuple[Path, ...], top: int) -> None:
    """Show the lines that allocated the most memory, from .mem files in DIRS."""
    results = analyze_malloc(dirs)
    if not results:
        click.echo("No allocation data found.")
        return

    table = Table("Bytes", "Location")
    for info in reversed(results[-top:]):
        table.add_row(str(info.bytes), f"{info.filename}:{info.linenumber}")
    Console().print(table)
