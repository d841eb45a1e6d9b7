"""Path filtering against catalog-derived and user-supplied glob patterns."""

import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable, Optional, Sequence, Tuple

from context_generator.types import PathType

from .catalog import category_name_for_pattern, filtered_patterns
from .git_rules import GitIgnoreExclusionRules
from .pattern_matcher import matches

# Category reported for paths excluded by rules loaded from ignore files
IGNORE_FILE_CATEGORY = "Ignore File"


@dataclass(frozen=True)
class ExclusionReason:
    """Why a path was excluded.

    Attributes:
        pattern: The pattern (or ignore-file rule) that matched.
        category: Name of the first catalog category containing the pattern,
            ``"Custom"`` for user patterns unknown to the catalog, or ``"Ignore File"``
            for rules loaded from ignore files.
    """

    pattern: str
    category: str


def relative_path(path: PathType, base_dir: PathType) -> str:
    """Return ``path`` relative to ``base_dir`` using forward slashes.

    If the path is not inside the base directory, the path is returned unchanged
    (still with forward slashes) instead of raising.

    Example:
        >>> relative_path("/project/src/main.py", "/project")
        'src/main.py'
        >>> relative_path("/project", "/project")
        '.'
        >>> relative_path("/elsewhere/x.txt", "/project")
        '/elsewhere/x.txt'
    """
    try:
        rel = PurePath(path).relative_to(PurePath(base_dir))
    except ValueError:
        rel = PurePath(path)
    return rel.as_posix()


class Filter:
    """Decides which paths are excluded from a scan.

    A filter holds an ordered, immutable sequence of glob patterns and, optionally,
    rules loaded from .gitignore-style files. For every pattern, in order, a path is
    checked three ways and the first hit wins:

    1. the base name alone (``*.log`` excludes ``logs/debug.log``),
    2. the whole relative path (``docs/_build`` excludes only that nested path),
    3. for directories, each component of the relative path, so a bare directory name
       excludes that directory wherever it is nested.

    Ignore-file rules are consulted only when no glob pattern matched.

    Attributes:
        patterns (Tuple[str, ...]): The glob patterns in evaluation order.
        ignore_rules (Optional[GitIgnoreExclusionRules]): Rules from ignore files.

    Example:
        >>> f = Filter.from_patterns(["*.log", "node_modules"])
        >>> f.classify("/repo/app/debug.log", "/repo", is_dir=False)
        ExclusionReason(pattern='*.log', category='LaTeX')
        >>> f.should_exclude("/repo/web/node_modules", "/repo", is_dir=True)
        True
        >>> f.should_exclude("/repo/README.md", "/repo", is_dir=False)
        False
    """

    def __init__(
        self,
        patterns: Iterable[str] = (),
        ignore_rules: Optional[GitIgnoreExclusionRules] = None,
    ) -> None:
        self._patterns: Tuple[str, ...] = tuple(patterns)
        self._ignore_rules = ignore_rules

    @classmethod
    def from_patterns(
        cls, patterns: Iterable[str], ignore_rules: Optional[GitIgnoreExclusionRules] = None
    ) -> "Filter":
        """Create a filter from explicit patterns only, without any catalog defaults."""
        return cls(patterns, ignore_rules)

    @classmethod
    def with_defaults(
        cls,
        additional_patterns: Iterable[str] = (),
        disabled_category_ids: Sequence[str] = (),
        ignore_rules: Optional[GitIgnoreExclusionRules] = None,
    ) -> "Filter":
        """Create a filter from the catalog defaults followed by additional patterns.

        Args:
            additional_patterns: Patterns appended after the catalog patterns.
            disabled_category_ids: Catalog categories whose patterns are left out. IDs
                are not validated here; see ``catalog.validate_category_ids``.
            ignore_rules: Optional rules loaded from ignore files.
        """
        patterns = filtered_patterns(disabled_category_ids)
        patterns.extend(additional_patterns)
        return cls(patterns, ignore_rules)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    @property
    def ignore_rules(self) -> Optional[GitIgnoreExclusionRules]:
        return self._ignore_rules

    def classify(self, path: PathType, base_dir: PathType, is_dir: bool) -> Optional[ExclusionReason]:
        """Return the reason ``path`` is excluded, or None if it should be included.

        Args:
            path: The path being visited.
            base_dir: The scan root that relative paths are computed from.
            is_dir: Whether the path is a directory.
        """
        rel_path = relative_path(path, base_dir)
        name = os.path.basename(os.fspath(path))
        components = rel_path.split("/") if is_dir else []

        for pattern in self._patterns:
            if (
                matches(pattern, name)
                or matches(pattern, rel_path)
                or any(matches(pattern, component) for component in components)
            ):
                return ExclusionReason(pattern=pattern, category=category_name_for_pattern(pattern))

        if self._ignore_rules is not None and rel_path != ".":
            rule = self._ignore_rules.matching_rule(rel_path + "/" if is_dir else rel_path)
            if rule is not None:
                return ExclusionReason(pattern=rule, category=IGNORE_FILE_CATEGORY)

        return None

    def should_exclude(self, path: PathType, base_dir: PathType, is_dir: bool) -> bool:
        """Return True if ``path`` should be left out of the scan."""
        return self.classify(path, base_dir, is_dir) is not None
