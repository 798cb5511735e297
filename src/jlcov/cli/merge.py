"""jlcov merge command - combine LCOV traces."""

from pathlib import Path

import click
from rich.console import Console

from jlcov.cli.utils import format_summary, get_config, read_traces
from jlcov.coverage import get_summary, lcov, merge_file_coverages


@click.command()
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.argument(
    "traces",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.pass_context
def merge_command(ctx: click.Context, output: Path, traces: tuple[Path, ...]) -> None:
    """Sum the coverage of TRACES (files or folders) into OUTPUT."""
    config = get_config(ctx)
    merged = merge_file_coverages(*read_traces(traces, config.lcov.trace_suffix))
    lcov.writefile(output, merged)

    console = Console(stderr=True)
    console.print(f"Merged {len(merged)} files into {output}", highlight=False)
    console.print(format_summary(*get_summary(merged)), highlight=False)
