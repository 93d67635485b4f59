"""Severity model."""

from enum import Enum
from typing import Optional


class Severity(Enum):
    """Severity levels for suggestions."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    @classmethod
    def parse(cls, text: str) -> "Severity":
        """Parse a severity name in any casing ("HIGH", "high", ...)."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown severity: {text!r}") from None

    def __lt__(self, other: "Severity") -> bool:
        return self.rank < other.rank

    def __le__(self, other: "Severity") -> bool:
        return self == other or self < other

    def __gt__(self, other: "Severity") -> bool:
        return not self <= other

    def __ge__(self, other: "Severity") -> bool:
        return not self < other


_ORDER = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]


def max_severity(
    a: Optional[Severity],
    b: Optional[Severity]
) -> Optional[Severity]:
    """Return the higher of two optional severities."""
    if a is None:
        return b
    if b is None:
        return a
    return a if a >= b else b
