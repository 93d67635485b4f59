"""
Source preprocessing before pattern matching.

Comment stripping is purely textual: markers inside string literals are
not recognised, which can hide or expose matches. A ``//`` right after a
colon is kept so URL literals such as ``https://api.example.com`` survive.
"""

import re

_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT = re.compile(r"(?<!:)//.*$", re.MULTILINE)

_MARKUP_SECTIONS = (
    re.compile(r"<template[\s\S]*?</template>", re.IGNORECASE),
    re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE),
)


def strip_comments(source: str) -> str:
    """Remove ``/* ... */`` block comments and ``//`` line comments."""
    return _LINE_COMMENT.sub("", _BLOCK_COMMENT.sub("", source))


def strip_markup_sections(source: str) -> str:
    """Remove template and style element bodies from single-file components."""
    for pattern in _MARKUP_SECTIONS:
        source = pattern.sub("", source)
    return source


def preprocess(source: str, strip_c_comments: bool = True, markup: bool = False) -> str:
    """
    Prepare source text for the usage and candidate passes.

    Args:
        source: Raw file content
        strip_c_comments: Remove C-style comments
        markup: Also strip template/style sections (Vue files)
    """
    if strip_c_comments:
        source = strip_comments(source)
    if markup:
        source = strip_markup_sections(source)
    return source
