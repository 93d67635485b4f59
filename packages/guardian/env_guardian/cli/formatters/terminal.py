"""Terminal formatter with Rich output."""

import os

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from guardian_core.models.risk import Severity

from env_guardian.cli.formatters.summary import ScanReport, SuggestedVariable

console = Console()


def _relative(path: str, base: str) -> str:
    try:
        return os.path.relpath(path, base)
    except ValueError:
        # Different drive on Windows
        return path


class TerminalFormatter:
    """Rich terminal output formatter for scan reports."""

    SEVERITY_COLORS = {
        Severity.CRITICAL: "red bold",
        Severity.HIGH: "orange1",
        Severity.MEDIUM: "yellow",
        Severity.LOW: "green",
    }

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False
    ):
        self.verbose = verbose
        self.quiet = quiet
        self.console = Console(no_color=True) if no_color else console

    def format_report(self, report: ScanReport, scan_path: str, scanned_files: int = 0):
        """Format and display a report."""
        if self.quiet and not report.suggested:
            return

        self._print_header(scan_path, scanned_files)

        if report.existing and not self.quiet:
            self.console.print("[bold green]Existing Environment Variables:[/bold green]")
            for item in report.existing:
                files = ", ".join(_relative(f, scan_path) for f in item.files)
                self.console.print(f"[green]✔ {escape(item.name)}[/green] (used in: {escape(files)})")
            self.console.print()

        if report.suggested:
            self.console.print("[bold yellow]⚠ Suggested Environment Variables:[/bold yellow]")
            for item in report.suggested:
                self._print_suggestion(item, scan_path)
            self.console.print()
        elif not self.quiet:
            self.console.print("[green]No hardcoded values found that should be environment variables.[/green]")

        if not self.quiet:
            self._print_summary(report)

    def _print_header(self, scan_path: str, scanned_files: int):
        header = Text()
        header.append("Environment Variable Report\n", style="bold")
        header.append(f"Scanned: {scan_path}", style="dim")
        if scanned_files:
            header.append(f"\nFiles analyzed: {scanned_files}", style="dim")
        self.console.print(Panel(header, border_style="blue"))
        self.console.print()

    def _print_suggestion(self, item: SuggestedVariable, scan_path: str):
        color = self.SEVERITY_COLORS[item.severity]
        label = escape(f"[{item.severity.value.upper()}]")
        files = ", ".join(_relative(f, scan_path) for f in item.files)
        self.console.print(
            f"[{color}]{label}[/{color}] [yellow]{escape(item.name)}[/yellow] (found in: {escape(files)})"
        )
        if self.verbose and item.value:
            self.console.print(f"    [dim]Value:[/dim] {escape(_mask_value(item.value))}")

    def _print_summary(self, report: ScanReport):
        counts = report.count_by_severity()
        parts = []
        for severity in sorted(Severity, reverse=True):
            color = self.SEVERITY_COLORS[severity]
            parts.append(f"[{color}]{severity.value.upper()}: {counts[severity.value]}[/{color}]")
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(
            f"  Existing: {len(report.existing)} | Suggested: {len(report.suggested)} | "
            + " | ".join(parts)
        )


def _mask_value(value: str) -> str:
    """Mask a captured value for display."""
    if len(value) <= 8:
        return '*' * len(value)
    return value[:4] + '*' * (len(value) - 8) + value[-4:]


def format_scan_report(
    report: ScanReport,
    scan_path: str,
    scanned_files: int = 0,
    verbose: bool = False,
    quiet: bool = False,
    no_color: bool = False
):
    """Convenience function to print a scan report."""
    formatter = TerminalFormatter(verbose=verbose, quiet=quiet, no_color=no_color)
    formatter.format_report(report, scan_path, scanned_files)
