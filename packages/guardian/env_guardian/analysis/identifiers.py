"""Identifier segmentation and string literal extraction."""

from __future__ import annotations

import re
from typing import List, Optional

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_WORD_SEPARATORS = re.compile(r"[\s_\-]+")

# Whole fragment wrapped in one quote kind; an unescaped inner quote of the
# same kind means concatenation, not a single literal.
_STRING_LITERAL = re.compile(r"^(['\"`])((?:\\.|(?!\1).)*)\1$", re.DOTALL)


def split_identifier(name: str) -> List[str]:
    """
    Split an identifier into lowercase words.

    Handles camelCase, snake_case and kebab-case:
      apiKey       -> ["api", "key"]
      DB_PASSWORD  -> ["db", "password"]
      s3-bucket    -> ["s3", "bucket"]
    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
    return [word.lower() for word in _WORD_SEPARATORS.split(spaced) if word]


def extract_string_literal(raw: str) -> Optional[str]:
    """
    Return the inner text of a quoted string literal, or None.

    Only fragments wholly wrapped in matching single, double or backtick
    quotes count; calls, numbers, booleans and concatenations return None.
    """
    match = _STRING_LITERAL.match(raw.strip())
    if not match:
        return None
    # Template literal with interpolation
    if match.group(1) == "`" and "${" in match.group(2):
        return None
    return match.group(2)
