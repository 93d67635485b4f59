"""Scan command implementation."""

import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console

from guardian_core.models.risk import Severity
from guardian_core.rules.loader import RuleLoader

from env_guardian.cli.formatters.summary import build_report
from env_guardian.cli.formatters.terminal import format_scan_report
from env_guardian.config.env_file import append_suggestions
from env_guardian.config.ignore import IgnoreManager
from env_guardian.scanners.env_scanner import EnvScanner

console = Console()
logger = logging.getLogger(__name__)

SEVERITY_CHOICES = ['critical', 'high', 'medium', 'low']


def run_scan(
    path: Path,
    output_format: str = "terminal",
    output_path: Optional[Path] = None,
    min_severity: Optional[str] = None,
    additional_rules: Optional[List[str]] = None,
    to_env: Optional[str] = None,
    fail_on_severity: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
    no_color: bool = False
) -> int:
    """
    Run the environment variable scan.

    Returns exit code: 0 for success, 1 when a reported suggestion reaches
    ``fail_on_severity``.
    """
    ignore_manager = IgnoreManager()
    config_loaded = ignore_manager.load(path)
    config = ignore_manager.config

    if verbose and config_loaded and output_format == "terminal":
        console.print(f"[dim]Loaded config from: {ignore_manager.loaded_from}[/dim]")

    engine = config.build_engine()

    # --rules files come on top of the configured ones
    if additional_rules:
        loader = RuleLoader([Path(r) for r in additional_rules])
        extra = loader.load_all_rules()
        engine.name_rules.extend(extra["name"])
        engine.value_rules.extend(extra["value"])

    scanner = EnvScanner(engine=engine, exclude_dirs=config.scan.exclude_dirs)

    if not quiet and output_format == "terminal":
        console.print(f"[dim]Scanning {path}...[/dim]")

    result = scanner.scan(path)

    threshold = Severity.parse(min_severity) if min_severity else config.min_severity
    report = build_report(result, ignore_manager.is_ignored, threshold)

    scan_root = str(path if path.is_dir() else path.parent)

    if output_format == "terminal":
        format_scan_report(
            report,
            scan_root,
            scanner.scanned_files,
            verbose=verbose,
            quiet=quiet,
            no_color=no_color
        )
    elif output_format == "json":
        from env_guardian.cli.formatters.json import format_json
        json_output = format_json(result, report, scan_root, scanner.scanned_files)
        if output_path:
            output_path.write_text(json_output, encoding="utf-8")
        else:
            click.echo(json_output)

    if to_env:
        env_path = Path.cwd() / to_env
        written = append_suggestions(env_path, result, ignore_manager.is_ignored)
        if written:
            console.print(f"[yellow]Added {len(written)} suggestion(s) to {to_env}[/yellow]")
        elif not quiet:
            console.print(f"[dim]No new suggestions to add to {to_env}[/dim]")

    if fail_on_severity and report.max_severity is not None:
        if report.max_severity >= Severity.parse(fail_on_severity):
            return 1
    return 0


@click.command()
@click.argument('path', type=click.Path(exists=True), default='.')
@click.option('--format', '-f', 'output_format',
              type=click.Choice(['terminal', 'json']),
              default='terminal', help='Output format')
@click.option('--output', '-o', type=click.Path(), help='Output file path (json format)')
@click.option('--severity', '-s', type=click.Choice(SEVERITY_CHOICES, case_sensitive=False),
              default=None, help='Minimum severity to report (default: configured priority)')
@click.option('--rules', '-r', type=click.Path(exists=True, dir_okay=False),
              multiple=True, help='Additional YAML rule files')
@click.option('--to-env', 'to_env', is_flag=False, flag_value='.env', default=None,
              help='Append suggestions to a .env file (default: .env)')
@click.option('--fail-on', type=click.Choice(SEVERITY_CHOICES, case_sensitive=False),
              default=None, help='Exit with error if suggestions reach this level')
@click.option('--no-color', is_flag=True, default=False,
              help='Disable colored output (for CI/CD environments)')
@click.pass_context
def scan(ctx: click.Context, path: str, output_format: str, output: Optional[str],
         severity: Optional[str], rules: tuple, to_env: Optional[str],
         fail_on: Optional[str], no_color: bool):
    """
    Scan a project for environment variable usage and hardcoded values.

    PATH is the directory or file to scan. Defaults to current directory.

    Examples:

        env-guardian scan ./my-app

        env-guardian scan . --to-env

        env-guardian scan . --to-env .env.local

        env-guardian scan . --format json --output report.json

        env-guardian scan . --severity high --fail-on critical
    """
    try:
        exit_code = run_scan(
            path=Path(path),
            output_format=output_format,
            output_path=Path(output) if output else None,
            min_severity=severity,
            additional_rules=list(rules),
            to_env=to_env,
            fail_on_severity=fail_on,
            verbose=ctx.obj.get('verbose', False),
            quiet=ctx.obj.get('quiet', False),
            no_color=no_color
        )
    except OSError as e:
        logger.debug("Scan failed", exc_info=True)
        console.print(f"[red]Scan failed:[/red] {e}")
        ctx.exit(2)

    ctx.exit(exit_code)
