"""Rule-based severity engine for candidate names and literal values."""

import re
import logging
from typing import Iterable, List, Optional, Sequence

from guardian_core.models.risk import Severity, max_severity
from guardian_core.rules.loader import Rule

from env_guardian.analysis.heuristics import (
    looks_like_secret_literal,
    looks_sensitive_name,
)

logger = logging.getLogger(__name__)

_I = re.IGNORECASE


def _rule(pattern: str, severity: Severity, flags: int = _I) -> Rule:
    return Rule(re.compile(pattern, flags), severity)


# Rules overlap across tiers on purpose; classify() keeps the highest match.
NAME_RULES: List[Rule] = [
    # --- CRITICAL ---
    _rule(r'^sk_[A-Za-z0-9]', Severity.CRITICAL, 0),          # Stripe-style key names
    _rule(r'^[A-Za-z0-9_\-]{32,}$', Severity.CRITICAL, 0),     # opaque token used as a name
    _rule(r'(PRIVATE|SECRET).*KEY', Severity.CRITICAL),        # SECRET_KEY, PRIVATE_KEY
    _rule(r'^SECRET.*$', Severity.CRITICAL),
    _rule(r'^.*_SECRET.*$', Severity.CRITICAL),
    _rule(r'password', Severity.CRITICAL),
    _rule(r'secret', Severity.CRITICAL),
    _rule(r'^(TOKEN|ACCESS_TOKEN|API_TOKEN|JSON_TOKEN)$', Severity.CRITICAL),
    _rule(r'^.*_TOKEN$', Severity.CRITICAL),

    # --- HIGH ---
    _rule(r'api[-_]?key', Severity.HIGH),
    _rule(r'token', Severity.HIGH),                            # csrfToken, nextPageToken
    _rule(r'private', Severity.HIGH),
    _rule(r'client[-_]?secret', Severity.HIGH),
    _rule(r'^.{20,}$', Severity.HIGH, 0),                      # long names
    _rule(r'jwt', Severity.HIGH),
    _rule(r'bearer', Severity.HIGH),
    _rule(r'dsn', Severity.HIGH),
    _rule(r'connection', Severity.HIGH),
    _rule(r'mongo', Severity.HIGH),
    _rule(r's3', Severity.HIGH),
    _rule(r'bucket', Severity.HIGH),

    # --- MEDIUM ---
    _rule(r'key', Severity.MEDIUM),
    _rule(r'id', Severity.MEDIUM),
    _rule(r'user(name)?', Severity.MEDIUM),
    _rule(r'account', Severity.MEDIUM),
    _rule(r'profile', Severity.MEDIUM),
    _rule(r'email', Severity.MEDIUM),
    _rule(r'phone', Severity.MEDIUM),
    _rule(r'project', Severity.MEDIUM),
    _rule(r'org(anization)?', Severity.MEDIUM),
    _rule(r'workspace', Severity.MEDIUM),
    _rule(r'region', Severity.MEDIUM),
    _rule(r'locale', Severity.MEDIUM),
    _rule(r'timezone', Severity.MEDIUM),
    _rule(r'cluster', Severity.MEDIUM),
    _rule(r'host', Severity.MEDIUM),
    _rule(r'server', Severity.MEDIUM),
    _rule(r'instance', Severity.MEDIUM),
    _rule(r'url', Severity.MEDIUM),
    _rule(r'uri', Severity.MEDIUM),
    _rule(r'schema', Severity.MEDIUM),

    # --- LOW ---
    _rule(r'port', Severity.LOW),
    _rule(r'version', Severity.LOW),
    _rule(r'mode', Severity.LOW),
    _rule(r'flag', Severity.LOW),
    _rule(r'lang(uage)?', Severity.LOW),
    _rule(r'path', Severity.LOW),
    _rule(r'dir(ectory)?', Severity.LOW),
    _rule(r'file', Severity.LOW),
    _rule(r'cache', Severity.LOW),
    _rule(r'temp', Severity.LOW),
    _rule(r'timeout', Severity.LOW),
    _rule(r'retry', Severity.LOW),
    _rule(r'limit', Severity.LOW),
    _rule(r'offset', Severity.LOW),
]


VALUE_RULES: List[Rule] = [
    # Opaque tokens
    _rule(r'^[A-Za-z0-9\-_]{40,}$', Severity.CRITICAL, 0),
    _rule(r'^[A-Za-z0-9\-_]{20,}$', Severity.HIGH, 0),
    _rule(r'^[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+$', Severity.HIGH, 0),  # JWT

    # Vendor key shapes
    _rule(r'^(?:sk|rk)_live_[A-Za-z0-9]{16,}', Severity.CRITICAL, 0),   # Stripe live
    _rule(r'^sk_test_[A-Za-z0-9]{16,}', Severity.HIGH, 0),             # Stripe test
    _rule(r'^AKIA[0-9A-Z]{16}$', Severity.CRITICAL, 0),                 # AWS access key id
    _rule(r'^gh[pousr]_[A-Za-z0-9]{36}', Severity.CRITICAL, 0),         # GitHub tokens
    _rule(r'^AIza[0-9A-Za-z\-_]{35}$', Severity.CRITICAL, 0),           # Google API key
    _rule(r'^sk-(?:proj-|ant-)?[A-Za-z0-9\-]{40,}', Severity.CRITICAL, 0),  # OpenAI / Anthropic
    _rule(r'^xox[baprs]-[0-9A-Za-z\-]{10,}', Severity.CRITICAL, 0),     # Slack

    # Connection strings and endpoints
    _rule(r'^(?:mysql|postgres|postgresql|mongodb(?:\+srv)?|redis|amqp)://[^\s:@/]+:[^\s@/]+@',
          Severity.CRITICAL),
    _rule(r'^https?://(?!.*(?:localhost|127\.0\.0\.1)).*'
          r'(?:api|auth|oauth|db|graphql|issuer|login|token|endpoint)',
          Severity.HIGH, _I | re.DOTALL),
]


def classify(text: str, rules: Iterable[Rule]) -> Optional[Severity]:
    """
    Return the highest severity among the rules matching ``text``.

    Every rule is evaluated; there is no first-match short circuit.
    Returns None when no rule matches.
    """
    severity: Optional[Severity] = None
    for rule in rules:
        if rule.matches(text):
            severity = max_severity(severity, rule.severity)
    return severity


class SeverityEngine:
    """
    Scores a candidate from its name and optional literal value.

    The explicit rule tables are authoritative; when neither table matches
    but the name or literal trips a heuristic classifier, the candidate is
    rated MEDIUM so it is still surfaced.
    """

    FALLBACK_SEVERITY = Severity.MEDIUM

    def __init__(
        self,
        name_rules: Optional[Sequence[Rule]] = None,
        value_rules: Optional[Sequence[Rule]] = None,
        extra_name_rules: Optional[Sequence[Rule]] = None,
        extra_value_rules: Optional[Sequence[Rule]] = None
    ):
        self.name_rules: List[Rule] = list(NAME_RULES if name_rules is None else name_rules)
        self.value_rules: List[Rule] = list(VALUE_RULES if value_rules is None else value_rules)

        if extra_name_rules:
            self.name_rules.extend(extra_name_rules)
        if extra_value_rules:
            self.value_rules.extend(extra_value_rules)

    def score(self, name: str, literal: Optional[str] = None) -> Optional[Severity]:
        """
        Compute the severity for one candidate.

        Args:
            name: Identifier name as written in source
            literal: Extracted string literal, or None when the initializer
                     was not a plain literal

        Returns:
            Severity, or None when nothing marks the candidate as sensitive
        """
        severity = classify(name, self.name_rules)

        if literal is not None:
            severity = max_severity(severity, classify(literal, self.value_rules))

        if severity is None:
            if looks_sensitive_name(name) or (
                literal is not None and looks_like_secret_literal(literal)
            ):
                logger.debug(f"Heuristic fallback for {name!r}")
                severity = self.FALLBACK_SEVERITY

        return severity


_engine: Optional[SeverityEngine] = None


def get_default_engine() -> SeverityEngine:
    """Get or create the engine using only the built-in rules."""
    global _engine
    if _engine is None:
        _engine = SeverityEngine()
    return _engine
