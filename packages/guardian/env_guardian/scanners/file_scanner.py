"""Per-file usage and candidate extraction."""

import logging
from pathlib import Path
from typing import Optional

from guardian_core.models.result import ScanResult, Suggestion

from env_guardian.analysis.identifiers import extract_string_literal
from env_guardian.rules.engine import SeverityEngine, get_default_engine
from env_guardian.scanners.languages import (
    Language,
    find_usages,
    is_env_reference,
    resolve_language,
)
from env_guardian.scanners.preprocess import preprocess

logger = logging.getLogger(__name__)


class FileScanner:
    """
    Scans one file's content into a partial ``ScanResult``.

    1. Preprocess (comment and markup stripping)
    2. Usage pass: direct environment reads go into ``usage``
    3. Candidate pass: name/initializer pairs that score a severity become
       suggestions, unless the initializer itself reads the environment

    The scanner holds no per-scan state and can be reused across files.
    """

    def __init__(self, engine: Optional[SeverityEngine] = None):
        self.engine = engine or get_default_engine()

    def scan_file(self, path: Path, language: Optional[Language] = None) -> Optional[ScanResult]:
        """
        Read and scan a file.

        Returns None when the file has no registry entry or cannot be read.
        """
        language = language or resolve_language(path)
        if language is None:
            return None

        try:
            content = path.read_text(encoding='utf-8', errors='ignore')
        except OSError as e:
            logger.warning(f"Error reading {path}: {e}")
            return None

        return self.scan_content(str(path), content, language)

    def scan_content(self, file_path: str, content: str, language: Language) -> ScanResult:
        """Scan already-loaded content attributed to ``file_path``."""
        result = ScanResult()
        code = preprocess(content, strip_c_comments=language.strip_comments, markup=language.markup)

        for name in find_usages(code):
            result.add_usage(name, file_path)

        for candidate in language.candidates:
            for match in candidate.finditer(code):
                name, initializer = candidate.extract(match)
                if not name:
                    continue

                # Re-export of an environment value, already counted as usage
                if initializer and is_env_reference(initializer):
                    continue

                literal = extract_string_literal(initializer) if initializer else None
                severity = self.engine.score(name, literal)
                if severity is None:
                    continue

                result.add_suggestion(name, Suggestion(file_path, literal, severity))

        logger.debug(f"Scanned {file_path} ({language.name}): {len(result)} identifiers")
        return result
