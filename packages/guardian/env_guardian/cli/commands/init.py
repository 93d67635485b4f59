"""Init command for creating configuration files."""

import sys
from pathlib import Path

import click
from rich.console import Console

from env_guardian.config.ignore import DEFAULT_CONFIG_FILENAME, create_default_config

console = Console()


@click.command()
@click.option('--force', '-f', is_flag=True, help='Overwrite existing config')
def init(force: bool):
    """
    Initialize env-guardian configuration.

    Creates a .env-guardian.yaml file in the current directory with
    default settings.

    Examples:

        env-guardian init

        env-guardian init --force
    """
    config_path = Path(DEFAULT_CONFIG_FILENAME)

    if config_path.exists() and not force:
        console.print(f"[yellow]Configuration file already exists: {config_path}[/yellow]")
        console.print("Use --force to overwrite")
        sys.exit(1)

    config_path.write_text(create_default_config(), encoding="utf-8")

    console.print(f"[green]Created configuration file: {config_path}[/green]")
    console.print()
    console.print("Edit this file to:")
    console.print("  - Ignore variables or files that are false positives")
    console.print("  - Set the minimum severity to report")
    console.print("  - Skip extra directories and add custom rules")
