"""
Ignore list and priority configuration management.

Handles:
- Loading and saving .env-guardian.yaml configuration
- Variable-level and file-level ignore rules
- The priority threshold (minimum severity to report)
- Extra exclude directories and rule files for the scanner
"""

import fnmatch
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from guardian_core.models.risk import Severity
from guardian_core.rules.loader import RuleLoader

from env_guardian.rules.engine import SeverityEngine

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = '.env-guardian.yaml'


@dataclass
class IgnoreConfig:
    """Variables and files whose suggestions are not reported."""
    variables: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)  # paths or glob patterns


@dataclass
class ScanSettings:
    """Scan configuration."""
    exclude_dirs: List[str] = field(default_factory=list)
    min_severity: str = "low"


@dataclass
class GuardianConfig:
    """Full configuration threaded into the scanner and report."""
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    scan: ScanSettings = field(default_factory=ScanSettings)
    rule_files: List[str] = field(default_factory=list)
    # Directory of the file this config was loaded from; relative rule files resolve here
    config_dir: Optional[Path] = field(default=None, compare=False, repr=False)

    @property
    def min_severity(self) -> Severity:
        try:
            return Severity.parse(self.scan.min_severity)
        except ValueError:
            logger.warning(f"Invalid min_severity '{self.scan.min_severity}', using low")
            return Severity.LOW

    def build_engine(self, base_path: Optional[Path] = None) -> SeverityEngine:
        """
        Create a severity engine with the configured extra rule files.

        Relative rule file paths resolve against ``base_path``, defaulting to
        the directory of the loaded config file (or the cwd when there is none).
        """
        base_path = base_path or self.config_dir
        loader = RuleLoader()
        for rule_file in self.rule_files:
            path = Path(rule_file)
            if not path.is_absolute() and base_path is not None:
                path = base_path / path
            loader.add_rule_file(path)

        rules = loader.load_all_rules()
        return SeverityEngine(
            extra_name_rules=rules["name"],
            extra_value_rules=rules["value"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ignore": {
                "variables": list(self.ignore.variables),
                "files": list(self.ignore.files),
            },
            "scan": {
                "exclude_dirs": list(self.scan.exclude_dirs),
                "min_severity": self.scan.min_severity,
            },
            "rules": list(self.rule_files),
        }


def _section(data: Dict[str, Any], key: str, path: Path) -> Dict[str, Any]:
    """Return a mapping section; a null section is empty, any other shape is ignored."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning(f"Ignoring '{key}' in {path}: expected a mapping")
        return {}
    return value


def _string_list(data: Dict[str, Any], key: str, path: Path) -> List[str]:
    """Return a list field as strings; any other shape falls back to an empty list."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"Ignoring '{key}' in {path}: expected a list")
        return []
    return [str(item) for item in value]


class IgnoreManager:
    """
    Manager for ignore rules and priority configuration.

    Loads configuration from .env-guardian.yaml, answers whether a
    variable or file is ignored, and writes changes back.
    """

    CONFIG_FILENAMES = [DEFAULT_CONFIG_FILENAME, '.env-guardian.yml', 'env-guardian.yaml']

    def __init__(self):
        self.config: GuardianConfig = GuardianConfig()
        self._loaded_from: Optional[Path] = None
        self._base_path: Optional[Path] = None  # Base path for relative path matching

    @property
    def loaded_from(self) -> Optional[Path]:
        return self._loaded_from

    def load(self, project_path: Path) -> bool:
        """
        Load configuration for a project.

        Searches for config in:
        1. The scan target directory (project_path)
        2. Current working directory (if different)
        3. Parent directories up to filesystem root

        Args:
            project_path: Root path of the project to scan

        Returns:
            True if configuration was loaded successfully
        """
        project_path = Path(project_path).resolve()
        if project_path.is_file():
            project_path = project_path.parent
        cwd = Path.cwd().resolve()

        search_paths: List[Path] = [project_path]
        if cwd != project_path:
            search_paths.append(cwd)

        parent = project_path.parent
        while parent != parent.parent:
            if parent not in search_paths:
                search_paths.append(parent)
            parent = parent.parent

        self._base_path = project_path

        for search_path in search_paths:
            for filename in self.CONFIG_FILENAMES:
                config_path = search_path / filename
                if config_path.exists():
                    return self._load_file(config_path)

        return False

    def _load_file(self, path: Path) -> bool:
        """Load configuration from a specific file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.warning(f"Failed to parse {path}: {e}")
            return False
        except OSError as e:
            logger.warning(f"Error loading {path}: {e}")
            return False

        if not isinstance(data, dict):
            if data:
                logger.warning(f"Ignoring {path}: top level is not a mapping")
            return False

        ignore_data = _section(data, 'ignore', path)
        scan_data = _section(data, 'scan', path)

        self.config = GuardianConfig(
            ignore=IgnoreConfig(
                variables=_string_list(ignore_data, 'variables', path),
                files=_string_list(ignore_data, 'files', path),
            ),
            scan=ScanSettings(
                exclude_dirs=_string_list(scan_data, 'exclude_dirs', path),
                min_severity=str(scan_data.get('min_severity') or 'low'),
            ),
            rule_files=_string_list(data, 'rules', path),
            config_dir=path.parent,
        )
        self._loaded_from = path
        logger.debug(f"Loaded config from {path}")
        return True

    def save(self, path: Optional[Path] = None) -> Path:
        """
        Write the configuration as YAML.

        Defaults to the file it was loaded from, or ./.env-guardian.yaml.
        """
        target = path or self._loaded_from or Path.cwd() / DEFAULT_CONFIG_FILENAME
        target.write_text(
            yaml.safe_dump(self.config.to_dict(), sort_keys=False),
            encoding="utf-8"
        )
        self._loaded_from = target
        return target

    def ignore_variables(self, names: Iterable[str]) -> List[str]:
        """Add variables to the ignore list; returns the ones newly added."""
        added = []
        for name in (n.strip() for n in names):
            if name and name not in self.config.ignore.variables:
                self.config.ignore.variables.append(name)
                added.append(name)
        return added

    def ignore_files(self, paths: Iterable[str]) -> List[str]:
        """Add files or glob patterns to the ignore list; returns the ones newly added."""
        added = []
        for path in (p.strip() for p in paths):
            if path and path not in self.config.ignore.files:
                self.config.ignore.files.append(path)
                added.append(path)
        return added

    def reset(self):
        """Clear every ignore rule."""
        self.config.ignore = IgnoreConfig()

    def set_min_severity(self, severity: Severity):
        self.config.scan.min_severity = severity.value

    def is_ignored(self, variable: str = "", file: str = "") -> bool:
        """
        Check whether a variable, or every variable in a file, is ignored.

        Args:
            variable: Identifier name (exact match)
            file: File path, matched by resolved path or glob pattern
        """
        if variable and variable in self.config.ignore.variables:
            return True

        if file and self.config.ignore.files:
            return self._match_file(file)

        return False

    def _match_file(self, file_path: str) -> bool:
        resolved = Path(file_path).resolve()
        rel_path = self._get_relative_path(file_path)

        for ignored in self.config.ignore.files:
            if Path(ignored).resolve() == resolved:
                return True
            if self._base_path is not None and (self._base_path / ignored).resolve() == resolved:
                return True
            if self._match_any_pattern(rel_path, [ignored]):
                return True

        return False

    def _get_relative_path(self, file_path: str) -> str:
        """
        Convert a file path to a relative path for pattern matching.

        If the file_path is within the base_path, returns the relative
        portion. Otherwise returns the original path.
        """
        if self._base_path is None:
            return file_path
        try:
            return str(Path(file_path).resolve().relative_to(self._base_path))
        except ValueError:
            # file_path is not relative to base_path
            return file_path

    def _match_any_pattern(self, path: str, patterns: List[str]) -> bool:
        """
        Check if a path matches any of the given glob patterns.

        Handles both simple patterns (tests/**) and recursive patterns.
        Uses forward slashes for cross-platform consistency.
        """
        normalized_path = path.replace('\\', '/')

        for pattern in patterns:
            normalized_pattern = pattern.replace('\\', '/')

            if fnmatch.fnmatch(normalized_path, normalized_pattern):
                return True

            # "tests/**" also matches the "tests/" prefix itself
            if normalized_pattern.endswith('/**'):
                prefix = normalized_pattern[:-3]
                if normalized_path.startswith(prefix + '/') or normalized_path == prefix:
                    return True

            # "**/*.test.js" matches against the file name
            if normalized_pattern.startswith('**/'):
                if fnmatch.fnmatch(Path(normalized_path).name, normalized_pattern[3:]):
                    return True

        return False


def create_default_config() -> str:
    """
    Create a default .env-guardian.yaml configuration template.

    Returns:
        YAML string with default configuration
    """
    return '''# env-guardian configuration

# Suggestions for these are never reported
ignore:
  variables: []
  # Paths or glob patterns, relative to the scanned directory
  files: []
  #   - "tests/**"
  #   - "src/legacy/config.js"

# Scan settings
scan:
  # Directory names skipped in addition to node_modules, .git, dist, build, ...
  exclude_dirs: []
  # Priority threshold: low, medium, high or critical
  min_severity: low

# Extra YAML rule files
rules: []
#  - guardian-rules.yaml
'''
