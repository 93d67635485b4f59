"""Name and literal analysis helpers."""

from env_guardian.analysis.identifiers import extract_string_literal, split_identifier
from env_guardian.analysis.heuristics import (
    looks_like_config_url,
    looks_like_secret_literal,
    looks_sensitive_name,
)

__all__ = [
    "extract_string_literal",
    "split_identifier",
    "looks_like_config_url",
    "looks_like_secret_literal",
    "looks_sensitive_name",
]
