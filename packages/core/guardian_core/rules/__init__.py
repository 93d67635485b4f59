"""Rule definitions and loader for env-guardian."""

from guardian_core.rules.loader import Rule, RuleLoader

__all__ = ["Rule", "RuleLoader"]
