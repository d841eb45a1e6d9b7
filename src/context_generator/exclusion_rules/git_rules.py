"""Exclusion rules using .gitignore pattern syntax."""

import logging
from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from pathspec.patterns import GitWildMatchPattern  # type: ignore

from context_generator.types import PathType

logger = logging.getLogger(__name__)


class GitIgnoreExclusionRules:
    """Exclusion rules read from .gitignore-style files.

    Rules use the standard .gitignore syntax through the pathspec library:
    - Basic globs (*, ?, [abc], [0-9], etc.)
    - Directory-only patterns (ending in /)
    - Negation patterns (starting with !)
    - Double-asterisk matching (**)
    - Comment lines (starting with #)

    Rules from several files are combined in the order they are loaded, and the last
    rule that matches a path decides its fate, exactly like Git. Lines that pathspec
    rejects as malformed are skipped with a warning rather than aborting the load.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("debug.log")
        True
        >>> rules.exclude("keep.log")
        False
        >>> rules.matching_rule("logs/debug.log")
        '*.log'

    Note:
        Paths passed in must be relative to the directory the rules apply to and use
        forward slashes, even on Windows. Directories should carry a trailing slash so
        that rules such as ``build/`` apply to them.
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the rules, optionally loading one or more rule files.

        Args:
            rules_files: Path or paths of .gitignore-style files to load.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._rules: List[Tuple[str, GitWildMatchPattern]] = []
        if rules_files is not None:
            self.load_rules(rules_files)

    def __len__(self) -> int:
        return len(self._rules)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the rules found in one or more files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                for line in f.read().splitlines():
                    self.add_rule(line)

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore rule. Blank lines and comments are ignored."""
        try:
            pattern = GitWildMatchPattern(rule)
        except ValueError as e:
            logger.warning("Ignoring malformed ignore rule %r: %s", rule, e)
            return

        # Comments and blank lines compile to a pattern with no effect
        if pattern.include is None:
            return
        self._rules.append((rule.strip(), pattern))

    def matching_rule(self, path: str) -> Optional[str]:
        """Return the rule that excludes ``path``, or None if the path is kept.

        The last matching rule wins. If that rule is a negation (``!pattern``), the path
        is kept and None is returned.
        """
        decisive: Optional[Tuple[str, GitWildMatchPattern]] = None
        for rule, pattern in self._rules:
            if pattern.regex.match(path) is not None:
                decisive = (rule, pattern)

        if decisive is None or not decisive[1].include:
            return None
        return decisive[0]

    def exclude(self, path: str) -> bool:
        """Return True if the path is excluded by the loaded rules."""
        return self.matching_rule(path) is not None
