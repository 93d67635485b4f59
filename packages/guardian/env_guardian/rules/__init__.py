"""Severity rules for env-guardian."""

from env_guardian.rules.engine import (
    NAME_RULES,
    VALUE_RULES,
    SeverityEngine,
    classify,
    get_default_engine,
)

__all__ = [
    "NAME_RULES",
    "VALUE_RULES",
    "SeverityEngine",
    "classify",
    "get_default_engine",
]
