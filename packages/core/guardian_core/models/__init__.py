"""Core data models for env-guardian."""

from guardian_core.models.risk import Severity, max_severity
from guardian_core.models.result import Entry, ScanResult, Suggestion

__all__ = [
    "Severity",
    "max_severity",
    "Entry",
    "ScanResult",
    "Suggestion",
]
