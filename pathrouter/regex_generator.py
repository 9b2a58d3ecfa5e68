"""Turn route path patterns such as ``/users/:name/*`` into regular expressions."""

from __future__ import annotations

import re

_PATH_PARAMS_RE = re.compile(r"(?::([^/]+))|(?:\*)", re.S)

# Characters that carry a meaning inside a regular expression.
_META_CHARS = frozenset("\\.+*?()|[]{}^$#&-~")


def _escape(text: str) -> str:
    return "".join("\\" + char if char in _META_CHARS else char for char in text)


def generate_common_regex_str(path: str) -> tuple[str, list[str]]:
    """Return the regex body for ``path`` and the parameter names it captures.

    ``:name`` segments capture one path segment; ``*`` captures anything and
    is reported under the name ``"*"``.
    """
    parts: list[str] = []
    names: list[str] = []
    pos = 0

    for match in _PATH_PARAMS_RE.finditer(path):
        parts.append(_escape(path[pos:match.start()]))
        if match.group(0) == "*":
            parts.append("(.*)")
            names.append("*")
        else:
            parts.append("([^/]+)")
            names.append(match.group(1))
        pos = match.end()

    parts.append(_escape(path[pos:]))
    return "".join(parts), names


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ValueError(str(exc)) from exc


def generate_exact_match_regex(path: str) -> tuple[re.Pattern[str], list[str]]:
    """Compile a regex matching exactly the paths described by ``path``."""
    body, names = generate_common_regex_str(path)
    return _compile(f"(?s)^{body}\\Z"), names


def generate_prefix_match_regex(path: str) -> tuple[re.Pattern[str], list[str]]:
    """Compile a regex matching any path that starts with the pattern ``path``."""
    body, names = generate_common_regex_str(path)
    return _compile(f"(?s)^{body}"), names