"""jlcov CLI - jlcov command."""

import click

from jlcov.cli.clean import clean_command
from jlcov.cli.malloc import malloc_command
from jlcov.cli.merge import merge_command
from jlcov.cli.process import process_command
from jlcov.cli.summary import summary_command
from jlcov.config.loader import load_config
from jlcov.core.errors import ConfigError
from jlcov.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="jlcov")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """jlcov - Julia line coverage amendment, merging and LCOV export."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if verbose:
        config.logging.level = "DEBUG"
    ctx.obj["config"] = config
    configure_logging(config=config.logging)


cli.add_command(process_command, name="process")
cli.add_command(merge_command, name="merge")
cli.add_command(summary_command, name="summary")
cli.add_command(clean_command, name="clean")
cli.add_command(malloc_command, name="malloc")


if __name__ == "__main__":
    cli()
