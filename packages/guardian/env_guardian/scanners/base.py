"""Base scanner interface."""

from abc import ABC, abstractmethod
from pathlib import Path

from guardian_core.models.result import ScanResult


class BaseScanner(ABC):
    """Abstract base class for all scanners."""

    name: str = "BaseScanner"

    @abstractmethod
    def scan(self, path: Path) -> ScanResult:
        """
        Scan the given path and return results.

        Args:
            path: Path to scan (file or directory)

        Returns:
            Identifier-keyed scan result
        """
        pass
