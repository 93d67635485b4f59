"""CLI main entry point for env-guardian."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from env_guardian.version import __version__

console = Console()


def _configure_logging(verbose: bool, quiet: bool):
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Only show errors')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool):
    """env-guardian - Find hardcoded values that should be environment variables."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet
    _configure_logging(verbose, quiet)


# Register commands
from env_guardian.cli.commands.scan import scan
from env_guardian.cli.commands.ignore import (
    ignore, ignore_files, ignore_list, reset_ignore, priority
)
from env_guardian.cli.commands.init import init

cli.add_command(scan)
cli.add_command(ignore)
cli.add_command(ignore_files)
cli.add_command(ignore_list)
cli.add_command(reset_ignore)
cli.add_command(priority)
cli.add_command(init)


if __name__ == '__main__':
    cli()
