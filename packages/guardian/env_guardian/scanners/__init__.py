"""Scanners for env-guardian."""

from env_guardian.scanners.env_scanner import EnvScanner, IGNORE_DIRS, scan_for_env
from env_guardian.scanners.file_scanner import FileScanner
from env_guardian.scanners.languages import LANGUAGES, resolve_language

__all__ = [
    "EnvScanner",
    "IGNORE_DIRS",
    "scan_for_env",
    "FileScanner",
    "LANGUAGES",
    "resolve_language",
]
