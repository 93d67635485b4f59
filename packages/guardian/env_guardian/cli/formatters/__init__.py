"""Output formatters for env-guardian."""

from env_guardian.cli.formatters.summary import ScanReport, build_report

__all__ = ["ScanReport", "build_report"]
