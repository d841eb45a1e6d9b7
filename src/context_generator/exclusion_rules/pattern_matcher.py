"""Shell-style glob matching for single names and relative paths."""

import fnmatch
import re
from functools import lru_cache
from typing import Optional, Pattern


def _has_unterminated_class(pattern: str) -> bool:
    """Return True if a ``[`` character class in the pattern is never closed.

    fnmatch silently treats such a bracket as a literal character; a pattern like that
    is almost certainly a typo, so it is reported as malformed instead.
    """
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] != "[":
            i += 1
            continue
        j = i + 1
        if j < n and pattern[j] == "!":
            j += 1
        if j < n and pattern[j] == "]":
            j += 1
        while j < n and pattern[j] != "]":
            j += 1
        if j >= n:
            return True
        i = j + 1
    return False


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Optional[Pattern[str]]:
    """Compile a glob pattern into a regular expression.

    Args:
        pattern: Glob pattern using ``*``, ``?``, ``[...]`` and ``[!...]``.

    Returns:
        The compiled expression, or None if the pattern is malformed.

    Example:
        >>> compile_pattern("*.log") is not None
        True
        >>> compile_pattern("[abc") is None
        True
    """
    if _has_unterminated_class(pattern):
        return None
    try:
        return re.compile(fnmatch.translate(pattern))
    except re.error:
        return None


def matches(pattern: str, candidate: str) -> bool:
    """Check whether a candidate name or path matches a glob pattern.

    The whole candidate must match. ``*`` matches any run of characters including
    none and including ``/``, ``?`` matches exactly one character, and ``[...]``
    matches a character class. Matching is case-sensitive on every platform.

    Malformed patterns never raise: they simply match nothing, so a bad pattern can
    never cause a path to be excluded.

    Args:
        pattern: The glob pattern.
        candidate: A base name or a ``/``-separated relative path.

    Returns:
        True if the candidate matches the pattern.

    Example:
        >>> matches("*.log", "debug.log")
        True
        >>> matches("*.log", "debug.txt")
        False
        >>> matches("file?.txt", "file1.txt")
        True
        >>> matches("[abc", "[abc")
        False
    """
    compiled = compile_pattern(pattern)
    if compiled is None:
        return False
    return compiled.match(candidate) is not None


def has_wildcards(pattern: str) -> bool:
    """Return True if the pattern contains any glob metacharacter.

    Example:
        >>> has_wildcards("*.pyc")
        True
        >>> has_wildcards("node_modules")
        False
    """
    return any(char in pattern for char in "*?[")
