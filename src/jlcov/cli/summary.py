"""jlcov summary command - report line coverage of LCOV traces."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from jlcov.cli.utils import format_percent, format_summary, get_config, read_traces
from jlcov.coverage import get_summary, merge_file_coverages


@click.command()
@click.argument(
    "traces",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option("--files", "per_file", is_flag=True, help="List every file")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def summary_command(
    ctx: click.Context, traces: tuple[Path, ...], per_file: bool, as_json: bool
) -> None:
    """Print covered/total lines for TRACES (files or folders)."""
    config = get_config(ctx)
    records = merge_file_coverages(*read_traces(traces, config.lcov.trace_suffix))
    covered, total = get_summary(records)

    if as_json:
        payload: dict[str, object] = {"covered_lines": covered, "total_lines": total}
        if per_file:
            files = []
            for fc in records:
                c, t = get_summary(fc)
                files.append({"path": fc.filename, "covered_lines": c, "total_lines": t})
            payload["files"] = files
        click.echo(json.dumps(payload))
        return

    console = Console()
    if per_file:
        table = Table("File", "Covered", "Total", "Percent")
        for fc in records:
            c, t = get_summary(fc)
            table.add_row(fc.filename, str(c), str(t), format_percent(c, t))
        console.print(table)
    console.print(format_summary(covered, total), highlight=False)
