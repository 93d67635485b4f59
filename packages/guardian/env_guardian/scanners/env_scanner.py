"""Directory walker that aggregates per-file results into one ScanResult."""

import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union, TYPE_CHECKING

from guardian_core.models.result import ScanResult

from env_guardian.rules.engine import SeverityEngine
from env_guardian.scanners.base import BaseScanner
from env_guardian.scanners.file_scanner import FileScanner
from env_guardian.scanners.languages import resolve_language

if TYPE_CHECKING:
    from env_guardian.config.ignore import GuardianConfig

logger = logging.getLogger(__name__)

# Dependency caches, VCS metadata and build output
IGNORE_DIRS: FrozenSet[str] = frozenset({
    'node_modules', '.git', 'dist', 'build', '.next',
    '__pycache__', 'venv', '.venv',
})


class EnvScanner(BaseScanner):
    """
    Recursive, depth-first environment variable scanner.

    Walks a directory tree in sorted order, skipping ``IGNORE_DIRS`` and any
    extra directory names, scans each file that has a registry entry and
    merges the per-file results. Merging is order independent, so the final
    ``ScanResult`` does not depend on traversal order.

    An unreadable file is logged and skipped. A directory that cannot be
    listed (including a missing root) raises ``OSError`` and aborts the walk.
    """

    name = "Env Scanner"

    def __init__(
        self,
        engine: Optional[SeverityEngine] = None,
        exclude_dirs: Optional[Iterable[str]] = None
    ):
        self.file_scanner = FileScanner(engine)
        self.ignore_dirs = IGNORE_DIRS | frozenset(exclude_dirs or ())
        self.scanned_files = 0

    def scan(self, path: Path) -> ScanResult:
        """
        Scan a directory tree (or a single file).

        Args:
            path: Root directory or file

        Returns:
            Tree-wide result keyed by identifier name
        """
        self.scanned_files = 0
        path = Path(path)

        if path.is_file():
            return self._scan_file(path) or ScanResult()

        return self._scan_directory(path)

    def _scan_directory(self, directory: Path) -> ScanResult:
        result = ScanResult()

        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                # Symlinked directories are not followed
                if entry.is_symlink():
                    continue
                if entry.name in self.ignore_dirs:
                    logger.debug(f"Skipping directory {entry}")
                    continue
                result.merge(self._scan_directory(entry))
                continue

            file_result = self._scan_file(entry)
            if file_result is not None:
                result.merge(file_result)

        return result

    def _scan_file(self, path: Path) -> Optional[ScanResult]:
        language = resolve_language(path)
        if language is None:
            return None

        self.scanned_files += 1
        return self.file_scanner.scan_file(path, language)


def scan_for_env(
    root: Union[str, Path],
    config: Optional["GuardianConfig"] = None
) -> ScanResult:
    """
    Scan ``root`` for environment variable usage and suggestions.

    Args:
        root: Directory (or file) to scan
        config: Optional configuration supplying extra exclude dirs and rule files

    Returns:
        Tree-wide ScanResult
    """
    engine = None
    exclude_dirs: Iterable[str] = ()

    if config is not None:
        engine = config.build_engine()
        exclude_dirs = config.scan.exclude_dirs

    return EnvScanner(engine=engine, exclude_dirs=exclude_dirs).scan(Path(root))
