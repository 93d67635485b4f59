"""
Heuristic classifiers for sensitive names and secret-looking literals.

These are the fallback judgments used when no explicit severity rule fires:
a name made of a sensitive word, or a value shaped like a token, JWT or a
configuration endpoint, is still worth surfacing.
"""

from __future__ import annotations

import re
from typing import FrozenSet

from env_guardian.analysis.identifiers import split_identifier

SENSITIVE_WORDS: FrozenSet[str] = frozenset({
    "secret",
    "token",
    "key",
    "password",
    "passwd",
    "pwd",
    "apikey",
    "api",
    "auth",
    "jwt",
    "bearer",
    "client",
    "issuer",
    "webhook",
    "dsn",
    "vault",
    "salt",
    "private",
    "cert",
    "database",
    "connection",
    "mongo",
    "s3",
    "bucket",
})

JWT_SHAPE = re.compile(r"^[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+$")

_CHARACTER_CLASSES = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"\d"),
    re.compile(r"[^A-Za-z0-9]"),
)

_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)
_LOOPBACK = re.compile(r"localhost|127\.0\.0\.1", re.IGNORECASE)
_CONFIG_URL_HINT = re.compile(
    r"(api|auth|oauth|db|graphql|issuer|login|token|endpoint)", re.IGNORECASE
)

MIN_TOKEN_LENGTH = 20


def looks_sensitive_name(name: str) -> bool:
    """True if any word of the identifier is a sensitive keyword."""
    return any(word in SENSITIVE_WORDS for word in split_identifier(name))


def looks_like_config_url(value: str) -> bool:
    """True for a non-loopback http(s) URL that points at an API/auth/db style endpoint."""
    if not _HTTP_URL.match(value) or _LOOPBACK.search(value):
        return False
    return _CONFIG_URL_HINT.search(value) is not None


def looks_like_long_token(value: str) -> bool:
    """Long, whitespace-free and mixing at least two character classes."""
    if len(value) < MIN_TOKEN_LENGTH or re.search(r"\s", value):
        return False
    classes = sum(1 for pattern in _CHARACTER_CLASSES if pattern.search(value))
    return classes >= 2


def looks_like_secret_literal(value: str) -> bool:
    """True if the literal has the shape of a JWT, an opaque token or a config URL."""
    if JWT_SHAPE.match(value):
        return True
    if looks_like_long_token(value):
        return True
    return looks_like_config_url(value)
