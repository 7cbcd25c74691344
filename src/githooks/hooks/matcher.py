"""Glob matching with brace alternation: matches, expand_braces.

Supported syntax:

- ``*`` matches any run of characters within one path segment
- ``?`` matches a single character within one path segment
- ``{a,b}`` expands to each alternative (nesting allowed)

Recursive ``**`` is not supported. A pattern containing it never matches,
so ``src/**/*.py`` selects nothing; use ``src/*.py`` or a plain ``*.py``
on a flatter layout instead.
"""

from __future__ import annotations

import re
from functools import lru_cache


def _find_close(pattern: str, start: int) -> tuple[int, list[int]] | None:
    """Index of the '}' closing the '{' at *start*, plus its top-level commas."""
    depth = 0
    commas: list[int] = []
    for i in range(start, len(pattern)):
        c = pattern[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i, commas
        elif c == "," and depth == 1:
            commas.append(i)
    return None


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` groups into the list of plain patterns they denote.

    Groups without a comma and unbalanced braces are kept literally.
    """
    for start, c in enumerate(pattern):
        if c != "{":
            continue
        found = _find_close(pattern, start)
        if found is None:
            continue
        end, commas = found
        if not commas:
            continue
        prefix, suffix = pattern[:start], pattern[end + 1 :]
        bounds = [start, *commas, end]
        alternatives = [pattern[a + 1 : b] for a, b in zip(bounds, bounds[1:])]
        expanded: list[str] = []
        for alt in alternatives:
            for tail in expand_braces(alt + suffix):
                candidate = prefix + tail
                if candidate not in expanded:
                    expanded.append(candidate)
        return expanded
    return [pattern]


def _translate(pattern: str) -> str:
    parts = []
    for c in pattern:
        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(c))
    return "".join(parts)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    alternatives = expand_braces(pattern)
    return re.compile("|".join(f"(?:{_translate(p)})" for p in alternatives))


def matches(path: str, pattern: str) -> bool:
    """Whether *path* matches the glob *pattern* in full."""
    if "**" in pattern:
        return False
    return _compile(pattern).fullmatch(path) is not None
