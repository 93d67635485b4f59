"""Report model shared by the terminal and JSON formatters."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from guardian_core.models.result import ScanResult
from guardian_core.models.risk import Severity


@dataclass
class ExistingVariable:
    """An environment variable the project already reads."""
    name: str
    files: List[str] = field(default_factory=list)


@dataclass
class SuggestedVariable:
    """A hardcoded identifier that should probably be an environment variable."""
    name: str
    severity: Severity
    files: List[str] = field(default_factory=list)
    value: Optional[str] = None


@dataclass
class ScanReport:
    """Filtered, ordered view of a ScanResult."""
    existing: List[ExistingVariable] = field(default_factory=list)
    suggested: List[SuggestedVariable] = field(default_factory=list)

    def count_by_severity(self) -> Dict[str, int]:
        counts = {sev.value: 0 for sev in Severity}
        for item in self.suggested:
            counts[item.severity.value] += 1
        return counts

    @property
    def max_severity(self) -> Optional[Severity]:
        return max((item.severity for item in self.suggested), default=None)


def build_report(
    result: ScanResult,
    is_ignored: Optional[Callable[..., bool]] = None,
    min_severity: Severity = Severity.LOW
) -> ScanReport:
    """
    Split a scan result into existing and suggested variables.

    A name that is read from the environment anywhere is reported as
    existing, never as a suggestion. Suggestions below ``min_severity`` or
    touched by the ignore list are dropped. Suggestions are ordered by
    severity (highest first), then name.
    """
    report = ScanReport()

    for name in sorted(result):
        entry = result[name]

        if entry.usage:
            report.existing.append(ExistingVariable(name, sorted(entry.usage)))
            continue

        if not entry.suggested:
            continue

        files = sorted(s.file for s in entry.suggested)
        if is_ignored is not None and (
            is_ignored(variable=name) or any(is_ignored(file=f) for f in files)
        ):
            continue

        # Suggestions are only recorded with a severity; LOW covers legacy data
        severity = entry.max_severity or Severity.LOW
        if severity < min_severity:
            continue

        value = next((s.value for s in entry.suggested if s.value), None)
        report.suggested.append(SuggestedVariable(name, severity, files, value))

    report.suggested.sort(key=lambda item: (-item.severity.rank, item.name))
    return report
