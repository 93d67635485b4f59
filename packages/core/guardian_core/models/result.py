"""Scan result models.

A ``ScanResult`` maps an identifier name, exactly as it appears in source,
to an ``Entry`` holding the files that read it from the environment
(``usage``) and the files where it looks like a hardcoded value that should
have been an environment variable (``suggested``).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from guardian_core.models.risk import Severity, max_severity


@dataclass
class Suggestion:
    """A hardcoded candidate found in one file."""
    file: str
    value: Optional[str] = None  # literal extracted at the match site
    severity: Optional[Severity] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "value": self.value,
            "severity": self.severity.value if self.severity else None,
        }


@dataclass
class Entry:
    """Usage and suggestions recorded for one identifier."""
    usage: List[str] = field(default_factory=list)
    suggested: List[Suggestion] = field(default_factory=list)

    def add_usage(self, path: str) -> None:
        if path not in self.usage:
            self.usage.append(path)

    def suggestion_for(self, path: str) -> Optional[Suggestion]:
        for suggestion in self.suggested:
            if suggestion.file == path:
                return suggestion
        return None

    def add_suggestion(self, suggestion: Suggestion) -> None:
        """
        Record a suggestion, keeping at most one per file.

        When the file already has a suggestion the stored one keeps the
        higher severity. Of two differing literal values the lexicographically
        smallest is kept, so the outcome does not depend on merge order.
        """
        existing = self.suggestion_for(suggestion.file)
        if existing is None:
            self.suggested.append(
                Suggestion(suggestion.file, suggestion.value, suggestion.severity)
            )
            return

        existing.severity = max_severity(existing.severity, suggestion.severity)
        values = [v for v in (existing.value, suggestion.value) if v is not None]
        existing.value = min(values) if values else None

    def merge(self, other: "Entry") -> None:
        for path in other.usage:
            self.add_usage(path)
        for suggestion in other.suggested:
            self.add_suggestion(suggestion)

    @property
    def max_severity(self) -> Optional[Severity]:
        """Highest severity across every file this identifier was suggested in."""
        result: Optional[Severity] = None
        for suggestion in self.suggested:
            result = max_severity(result, suggestion.severity)
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "usage": sorted(self.usage),
            "suggested": [
                s.to_dict() for s in sorted(self.suggested, key=lambda s: s.file)
            ],
        }


class ScanResult(Dict[str, Entry]):
    """Tree-wide mapping of identifier name to ``Entry``."""

    def entry(self, name: str) -> Entry:
        """Get the entry for ``name``, creating an empty one if needed."""
        if name not in self:
            self[name] = Entry()
        return self[name]

    def add_usage(self, name: str, path: str) -> None:
        self.entry(name).add_usage(path)

    def add_suggestion(self, name: str, suggestion: Suggestion) -> None:
        self.entry(name).add_suggestion(suggestion)

    def merge(self, other: "ScanResult") -> "ScanResult":
        """Merge ``other`` into this result in place and return self."""
        for name, entry in other.items():
            self.entry(name).merge(entry)
        return self

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """JSON-serializable form with deterministic ordering."""
        return {name: self[name].to_dict() for name in sorted(self)}
