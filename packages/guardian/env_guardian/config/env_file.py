"""Append suggested variables to a .env file."""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional

from guardian_core.models.result import ScanResult

logger = logging.getLogger(__name__)

ENV_FILE_HEADER = """

# Suggested by env-guardian
# Rename the variables to your project's conventions and fill in any
# values the scanner could not capture.
"""

_NEEDS_QUOTES = re.compile(r"[\s#'\"\\]")


def format_env_line(name: str, value: Optional[str]) -> str:
    """Render ``NAME=value``, double-quoting values that need it."""
    if not value:
        return f"{name}="
    if _NEEDS_QUOTES.search(value):
        escaped = (
            value.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
        )
        return f'{name}="{escaped}"'
    return f"{name}={value}"


def append_suggestions(
    env_path: Path,
    result: ScanResult,
    is_ignored: Optional[Callable[..., bool]] = None
) -> List[str]:
    """
    Append suggested variables to ``env_path``.

    A variable is written when it has at least one suggestion, is not
    already defined in the file and neither it nor any file it was found in
    is ignored. The value is the first literal captured for it.

    Args:
        env_path: .env file to create or append to
        result: Scan result
        is_ignored: ``is_ignored(variable=..., file=...)`` callback

    Returns:
        Names of the variables written
    """
    existing = env_path.read_text(encoding="utf-8") if env_path.exists() else ""

    lines: List[str] = []
    written: List[str] = []

    for name in sorted(result):
        entry = result[name]
        if not entry.suggested:
            continue
        if re.search(rf"^\s*(?:export\s+)?{re.escape(name)}=", existing, re.MULTILINE):
            continue
        if is_ignored is not None and (
            is_ignored(variable=name)
            or any(is_ignored(file=s.file) for s in entry.suggested)
        ):
            continue

        value = next((s.value for s in entry.suggested if s.value), None)
        lines.append(format_env_line(name, value))
        written.append(name)

    if not written:
        return written

    with open(env_path, "a", encoding="utf-8") as f:
        f.write(ENV_FILE_HEADER + "\n".join(lines) + "\n")

    logger.debug(f"Appended {len(written)} suggestion(s) to {env_path}")
    return written
