"""YAML rule loader for env-guardian."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern

import yaml

from guardian_core.models.risk import Severity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """A text pattern and the severity it implies when it matches."""
    pattern: Pattern
    severity: Severity

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


RULE_TARGETS = ("name", "value")


class RuleLoader:
    """
    Loader for YAML rule files.

    A rule file looks like::

        rules:
          - target: name
            pattern: "^STRIPE_"
            severity: critical
          - target: value
            pattern: "^xoxb-"
            severity: high
            ignore_case: false

    Rules are grouped by target so they can be handed to the severity
    engine as extra name or value rules.
    """

    def __init__(self, rule_files: Optional[List[Path]] = None):
        self.rule_files = list(rule_files or [])

    def add_rule_file(self, path: Path):
        """Add a rule file to load."""
        if path.exists() and path.is_file():
            self.rule_files.append(path)
        else:
            logger.warning(f"Rule file does not exist: {path}")

    def load_all_rules(self) -> Dict[str, List[Rule]]:
        """
        Load all rules from configured files.

        Returns:
            Dictionary mapping target ("name" or "value") to rules.
        """
        all_rules: Dict[str, List[Rule]] = {target: [] for target in RULE_TARGETS}

        for rule_file in self.rule_files:
            for target, rules in self.load_rule_file(rule_file).items():
                all_rules[target].extend(rules)

        return all_rules

    def load_rule_file(self, file_path: Path) -> Dict[str, List[Rule]]:
        """
        Load rules from a single YAML file.

        Args:
            file_path: Path to the YAML rule file

        Returns:
            Dictionary mapping target to the valid rules in the file
        """
        rules: Dict[str, List[Rule]] = {target: [] for target in RULE_TARGETS}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML parse error in {file_path}: {e}")
            return rules
        except OSError as e:
            logger.error(f"Error loading {file_path}: {e}")
            return rules

        if not isinstance(data, dict) or 'rules' not in data:
            logger.warning(f"No rules found in {file_path}")
            return rules

        entries = data['rules'] or []
        if not isinstance(entries, list):
            logger.warning(f"'rules' in {file_path} is not a list")
            return rules

        for index, rule_data in enumerate(entries):
            rule = self._build_rule(rule_data, file_path, index)
            if rule is not None:
                rules[rule_data.get('target', 'name')].append(rule)

        return rules

    def _build_rule(
        self,
        rule_data: Any,
        source_file: Path,
        index: int
    ) -> Optional[Rule]:
        """Validate one rule entry and compile it; None if invalid."""
        if not isinstance(rule_data, dict):
            logger.warning(f"Rule #{index} in {source_file} is not a mapping")
            return None

        for required in ('pattern', 'severity'):
            if required not in rule_data:
                logger.warning(
                    f"Rule #{index} missing required field '{required}' in {source_file}"
                )
                return None

        target = rule_data.get('target', 'name')
        if target not in RULE_TARGETS:
            logger.warning(f"Invalid target '{target}' in rule #{index} of {source_file}")
            return None

        try:
            severity = Severity.parse(str(rule_data['severity']))
        except ValueError:
            logger.warning(
                f"Invalid severity '{rule_data['severity']}' in rule #{index} of {source_file}"
            )
            return None

        flags = re.IGNORECASE if rule_data.get('ignore_case', True) else 0
        try:
            pattern = re.compile(str(rule_data['pattern']), flags)
        except re.error as e:
            logger.warning(f"Invalid pattern in rule #{index} of {source_file}: {e}")
            return None

        return Rule(pattern=pattern, severity=severity)
