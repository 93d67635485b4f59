"""JSON output formatter."""

import json
from pathlib import Path
from typing import Any, Dict

from guardian_core.models.result import ScanResult

from env_guardian.cli.formatters.summary import ScanReport
from env_guardian.version import __version__


class JSONFormatter:
    """JSON output formatter for scan results."""

    def __init__(self, pretty: bool = True):
        self.pretty = pretty

    def format(
        self,
        result: ScanResult,
        report: ScanReport,
        scan_path: str = "",
        scanned_files: int = 0
    ) -> Dict[str, Any]:
        """
        Format a scan as a JSON-serializable dictionary.

        ``results`` holds the full, unfiltered ScanResult; ``suggested``
        holds the report view after ignore rules and the severity threshold.
        """
        return {
            "version": __version__,
            "scan_path": scan_path,
            "scanned_files": scanned_files,
            "summary": self._create_summary(report),
            "existing": [
                {"name": item.name, "files": item.files} for item in report.existing
            ],
            "suggested": [
                {
                    "name": item.name,
                    "severity": item.severity.value,
                    "files": item.files,
                    "value": item.value,
                }
                for item in report.suggested
            ],
            "results": result.to_dict(),
        }

    def format_to_string(
        self,
        result: ScanResult,
        report: ScanReport,
        scan_path: str = "",
        scanned_files: int = 0
    ) -> str:
        """Format a scan as a JSON string."""
        data = self.format(result, report, scan_path, scanned_files)
        indent = 2 if self.pretty else None
        return json.dumps(data, indent=indent)

    def save(
        self,
        result: ScanResult,
        report: ScanReport,
        output_path: Path,
        scan_path: str = "",
        scanned_files: int = 0
    ):
        """Save a scan as a JSON file."""
        output_path.write_text(
            self.format_to_string(result, report, scan_path, scanned_files),
            encoding="utf-8"
        )

    def _create_summary(self, report: ScanReport) -> Dict[str, Any]:
        max_sev = report.max_severity
        return {
            "existing": len(report.existing),
            "suggested": len(report.suggested),
            "by_severity": report.count_by_severity(),
            "max_severity": max_sev.value if max_sev else None,
        }


def format_json(
    result: ScanResult,
    report: ScanReport,
    scan_path: str = "",
    scanned_files: int = 0,
    pretty: bool = True
) -> str:
    """Convenience function to format a scan as JSON."""
    formatter = JSONFormatter(pretty=pretty)
    return formatter.format_to_string(result, report, scan_path, scanned_files)
