"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

from env_guardian.rules.engine import SeverityEngine
from env_guardian.scanners.file_scanner import FileScanner


@pytest.fixture
def fixtures_path() -> Path:
    """Return the path to test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_project_path(fixtures_path: Path) -> Path:
    """Return the path to the sample project fixture."""
    return fixtures_path / "sample_project"


@pytest.fixture
def engine() -> SeverityEngine:
    """A severity engine with only the built-in rules."""
    return SeverityEngine()


@pytest.fixture
def file_scanner(engine: SeverityEngine) -> FileScanner:
    return FileScanner(engine)
