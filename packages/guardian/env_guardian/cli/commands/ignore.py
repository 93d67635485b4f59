"""Ignore list and priority commands."""

import os
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from guardian_core.models.risk import Severity

from env_guardian.config.ignore import IgnoreManager

console = Console()


def _load_manager() -> IgnoreManager:
    manager = IgnoreManager()
    manager.load(Path.cwd())
    return manager


def _save(manager: IgnoreManager):
    path = manager.save()
    console.print(f"[blue]Updated ignore config at {path}[/blue]")


def _ignore_entry(path: str) -> str:
    """Glob patterns are kept as typed; plain paths become relative to cwd."""
    if any(c in path for c in "*?["):
        return path
    return os.path.relpath(Path(path).resolve(), Path.cwd().resolve())


@click.command()
@click.argument('variables', nargs=-1, required=True)
def ignore(variables: tuple):
    """
    Ignore one or more variables everywhere.

    Examples:

        env-guardian ignore API_URL apiBase
    """
    manager = _load_manager()
    added = manager.ignore_variables(variables)

    for name in variables:
        name = name.strip()
        if not name:
            continue
        if name in added:
            console.print(f"[green]✔ Now ignoring {escape(name)}[/green]")
        else:
            console.print(f"[dim]{escape(name)} is already ignored[/dim]")

    _save(manager)


@click.command(name='ignore-files')
@click.argument('files', nargs=-1, required=True)
def ignore_files(files: tuple):
    """
    Ignore ALL variables in one or more files.

    Paths are stored relative to the current directory; glob patterns
    such as "tests/**" are stored as given.

    Examples:

        env-guardian ignore-files src/legacy/config.js "tests/**"
    """
    manager = _load_manager()
    entries = [_ignore_entry(f) for f in files]
    added = manager.ignore_files(entries)

    for entry in entries:
        if entry in added:
            console.print(f"[green]✔ Now ignoring ALL variables in {escape(entry)}[/green]")
        else:
            console.print(f"[dim]ALL variables in {escape(entry)} are already ignored[/dim]")

    _save(manager)


@click.command(name='ignore-list')
def ignore_list():
    """List all currently ignored variables and files."""
    manager = _load_manager()
    ignored = manager.config.ignore

    if not ignored.variables and not ignored.files:
        console.print("[dim]No ignore rules configured.[/dim]")
        return

    console.print("[bold]Currently Ignored Rules:[/bold]")
    console.print()
    for name in ignored.variables:
        console.print(f"[green]• {escape(name)} (globally)[/green]")
    for path in ignored.files:
        console.print(f"[cyan]• ALL variables in {escape(path)}[/cyan]")
    console.print()


@click.command(name='reset-ignore')
@click.option('--force', '-f', is_flag=True, help='Skip confirmation')
def reset_ignore(force: bool):
    """Reset the ignore list to ignore nothing."""
    manager = _load_manager()

    if not force and not click.confirm(
        "This will clear every ignore rule in the config file. Continue?", default=False
    ):
        console.print("[red]Reset canceled[/red]")
        return

    manager.reset()
    _save(manager)
    console.print("[bright_blue]Reset complete[/bright_blue]")


@click.command()
@click.argument('level', type=click.Choice([s.value for s in Severity], case_sensitive=False))
def priority(level: str):
    """
    Set the minimum severity reported by scan.

    Examples:

        env-guardian priority high
    """
    manager = _load_manager()
    severity = Severity.parse(level)
    manager.set_min_severity(severity)
    _save(manager)
    console.print(f"[green]✔ Reporting {severity.value.upper()} and above[/green]")
