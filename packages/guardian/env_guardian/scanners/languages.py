"""
Language matcher registry.

Maps a file to the candidate patterns for its language. Each
``CandidatePattern`` declares which capture group holds the candidate name
and which holds the initializer expression, so callers never need to know
the language to read a match.

Also holds the usage patterns that recognise direct environment reads
(``process.env.API_URL``, ``os.getenv("API_URL")``, ``$API_URL`` ...).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Pattern, Tuple, Union


@dataclass(frozen=True)
class CandidatePattern:
    """A name/initializer pattern with its capture group layout."""
    pattern: Pattern
    name_group: int = 1
    initializer_group: Optional[int] = 2

    def finditer(self, text: str) -> Iterator["re.Match[str]"]:
        return self.pattern.finditer(text)

    def extract(self, match: "re.Match[str]") -> Tuple[Optional[str], Optional[str]]:
        """Return (name, initializer) for a match; initializer is stripped."""
        name = match.group(self.name_group)
        initializer = None
        if self.initializer_group is not None:
            raw = match.group(self.initializer_group)
            if raw is not None:
                initializer = raw.strip()
        return name, initializer


@dataclass(frozen=True)
class Language:
    """Registry entry for one language or file format."""
    name: str
    candidates: Tuple[CandidatePattern, ...]
    strip_comments: bool = True
    markup: bool = False


def _p(
    regex: str,
    flags: int = 0,
    name_group: int = 1,
    initializer_group: Optional[int] = 2
) -> CandidatePattern:
    return CandidatePattern(re.compile(regex, flags), name_group, initializer_group)


# const/let/var NAME = EXPR, up to the first ';' or newline
_JS_DECLARATION = _p(
    r"(const|let|var)\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*=\s*([\s\S]*?)(?=;|\n|\Z)",
    name_group=2, initializer_group=3,
)
# Vue options/props:  apiBase: 'https://...'
_VUE_BINDING = _p(r"([A-Za-z_$][A-Za-z0-9_$]*)\s*:\s*(['\"`][^'\"`]+['\"`]|process\.env\.[A-Z0-9_]+)")

_SHELL_EXPORT = _p(r"export\s+([A-Z0-9_]+)=([^\n]+)")
_SHELL_ASSIGNMENT = _p(r"([A-Z0-9_]+)=([^\n]+)")
_YAML_KEY = _p(r"([A-Z0-9_]+):[ \t]*(.+)", re.IGNORECASE)

_SHELL = (_SHELL_EXPORT, _SHELL_ASSIGNMENT)

LANGUAGES: Dict[str, Language] = {
    "js": Language("js", (_JS_DECLARATION,)),
    "ts": Language("ts", (_JS_DECLARATION,)),
    "vue": Language("vue", (_JS_DECLARATION, _VUE_BINDING), markup=True),

    "py": Language("py", (_p(r"([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(['\"`]?.+['\"`]?)"),)),
    "rb": Language("rb", (_p(r"([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.+)"),)),

    "sh": Language("sh", _SHELL),
    "bash": Language("bash", _SHELL),
    "env": Language("env", (_SHELL_ASSIGNMENT,)),

    "json": Language("json", (
        _p(r"[\"']([A-Z0-9_]+)[\"']\s*:\s*(\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'|[^,}\]\n]+)"),
    )),
    "yml": Language("yml", (_YAML_KEY,)),
    "yaml": Language("yaml", (_YAML_KEY,)),

    "php": Language("php", (_p(r"\$([A-Za-z0-9_]+)\s*=\s*(.+);"),)),
    "java": Language("java", (_p(r"String\s+([A-Za-z0-9_]+)\s*=\s*(.+);"),)),
    "kt": Language("kt", (_p(r"val\s+([A-Za-z0-9_]+)\s*=\s*(.+)"),)),
    "go": Language("go", (_p(r"([A-Za-z0-9_]+)\s*:=\s*(.+)"),)),
    "cs": Language("cs", (_p(r"var\s+([A-Za-z0-9_]+)\s*=\s*(.+);"),)),

    "dockerfile": Language("dockerfile", (
        _p(r"^\s*ENV\s+([A-Z0-9_]+)(?:[ \t]+|=)(.+)$", re.IGNORECASE | re.MULTILINE),
        _p(r"^\s*ARG\s+([A-Z0-9_]+)=([^\n]+)", re.IGNORECASE | re.MULTILINE),
    )),

    # Registry auth lines start with '//', so comment stripping is off.
    "npmrc": Language("npmrc", (
        _p(r"^\s*//[^\n]*?:(_authToken)\s*=\s*(.+)$", re.IGNORECASE | re.MULTILINE),
        _p(r"^\s*(_auth)\s*=\s*(.+)$", re.IGNORECASE | re.MULTILINE),
    ), strip_comments=False),
    "yarnrc": Language("yarnrc", (
        _p(r"(npmAuthToken):\s*(.+)", re.IGNORECASE),
        _p(r"(_authToken)\s*=\s*(.+)", re.IGNORECASE),
    ), strip_comments=False),

    "github": Language("github", (_YAML_KEY,)),
    "gitlab": Language("gitlab", (_YAML_KEY,)),
    "circleci": Language("circleci", (_YAML_KEY,)),
    "azure": Language("azure", (_YAML_KEY,)),
}

EXTENSION_ALIASES: Dict[str, str] = {
    "jsx": "js",
    "tsx": "ts",
    "mjs": "js",
    "cjs": "js",
    "mts": "ts",
    "cts": "ts",
    "zsh": "sh",
}

_YAML_EXTENSIONS = {"yml", "yaml"}
_CI_DIRECTORIES = {".github": "github", ".circleci": "circleci"}


def _language_key(path: Path) -> Optional[str]:
    name = path.name.lower()

    if name == "dockerfile" or name.startswith("dockerfile.") or name.endswith(".dockerfile"):
        return "dockerfile"
    if name == ".env" or name.startswith(".env."):
        return "env"
    if name == ".npmrc":
        return "npmrc"
    if name.startswith(".yarnrc"):
        return "yarnrc"

    ext = name.rsplit(".", 1)[1] if "." in name else None
    if ext is None:
        return None

    if ext in _YAML_EXTENSIONS:
        if name.startswith(".gitlab-ci."):
            return "gitlab"
        if name.startswith("azure-pipelines."):
            return "azure"
        for part in path.parts[:-1]:
            if part in _CI_DIRECTORIES:
                return _CI_DIRECTORIES[part]

    return EXTENSION_ALIASES.get(ext, ext)


def resolve_language(path: Union[str, Path]) -> Optional[Language]:
    """
    Find the registry entry for a file.

    Special file names (Dockerfile, .env files, npm/yarn rc files, CI
    pipeline YAML) win over the extension; jsx/tsx and friends are aliased
    to js/ts. Returns None for files with no registry entry.
    """
    key = _language_key(Path(path))
    if key is None:
        return None
    return LANGUAGES.get(key)


# ---------------------------------------------------------------------------
# Usage patterns
# ---------------------------------------------------------------------------

_ENV_NAME = r"([A-Z_][A-Z0-9_]*)"

USAGE_PATTERNS: List[Pattern] = [
    # JavaScript / TypeScript
    re.compile(r"process\.env\.([A-Z0-9_]+)\b"),
    re.compile(r"process\.env\[\s*['\"`]([A-Z0-9_]+)['\"`]\s*\]"),
    re.compile(r"import\.meta\.env\.([A-Z0-9_]+)\b"),
    re.compile(r"Deno\.env\.get\(\s*['\"]([A-Z0-9_]+)['\"]"),
    # Python
    re.compile(r"os\.environ\[\s*['\"]([A-Z0-9_]+)['\"]\s*\]"),
    re.compile(r"os\.environ\.get\(\s*['\"]([A-Z0-9_]+)['\"]"),
    # os.getenv, PHP getenv, Java System.getenv
    re.compile(r"\bgetenv\(\s*['\"]([A-Z0-9_]+)['\"]"),
    # Ruby
    re.compile(r"\bENV\[\s*['\"]([A-Z0-9_]+)['\"]\s*\]"),
    re.compile(r"\bENV\.fetch\(\s*['\"]([A-Z0-9_]+)['\"]"),
    # Go, C#
    re.compile(r"os\.(?:Getenv|LookupEnv)\(\s*\"([A-Z0-9_]+)\""),
    re.compile(r"Environment\.GetEnvironmentVariable\(\s*\"([A-Z0-9_]+)\""),
    # Shell expansion: $NAME and ${NAME}
    re.compile(r"\$\{?" + _ENV_NAME),
]

# const { API_URL, DB_PASS: password } = process.env
_DESTRUCTURED_ENV = re.compile(r"(?:const|let|var)\s*\{([^}]+)\}\s*=\s*process\.env\b")
_ALL_CAPS = re.compile(r"^[A-Z_][A-Z0-9_]*$")


def find_usages(text: str) -> Iterator[str]:
    """Yield every environment variable name read in ``text``."""
    for pattern in USAGE_PATTERNS:
        for match in pattern.finditer(text):
            yield match.group(1)

    for match in _DESTRUCTURED_ENV.finditer(text):
        for part in match.group(1).split(","):
            original = part.split(":", 1)[0].split("=", 1)[0].strip()
            if _ALL_CAPS.match(original):
                yield original


# GitHub Actions expressions that pull a value from the runner context
_CI_EXPRESSION = re.compile(r"\$\{\{\s*(?:secrets|env|vars)\.[A-Za-z_][A-Za-z0-9_]*\s*\}\}")


def is_env_reference(initializer: str) -> bool:
    """True if the initializer reads an environment variable or expands one."""
    if _CI_EXPRESSION.search(initializer):
        return True
    return any(pattern.search(initializer) for pattern in USAGE_PATTERNS)
