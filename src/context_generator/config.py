"""Run configuration for a single scan."""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from context_generator.exceptions import DirectoryNotFoundError, InvalidCategoryError
from context_generator.exclusion_rules.catalog import validate_category_ids
from context_generator.exclusion_rules.filter import Filter
from context_generator.exclusion_rules.git_rules import GitIgnoreExclusionRules


def split_ids(values: Iterable[str]) -> List[str]:
    """Flatten comma-separated category IDs, trimming whitespace and dropping blanks.

    Example:
        >>> split_ids(["go, vcs", "logs"])
        ['go', 'vcs', 'logs']
    """
    ids: List[str] = []
    for value in values:
        ids.extend(part.strip() for part in value.split(",") if part.strip())
    return ids


@dataclass
class ScanConfig:
    """Everything a scan needs to know, independent of how it was supplied.

    Attributes:
        directory: Directory (or single file) to scan.
        exclude: Extra glob patterns, evaluated after the catalog patterns.
        disable_categories: Catalog category IDs to leave out.
        no_defaults: Ignore the catalog entirely; only ``exclude`` applies.
        dry_run: Report instead of rendering.
        exclude_from: .gitignore-style files whose rules are applied as well.
        output: File to write to instead of standard output.
        verbose: Enable debug logging.
    """

    directory: Path = field(default_factory=lambda: Path("."))
    exclude: List[str] = field(default_factory=list)
    disable_categories: List[str] = field(default_factory=list)
    no_defaults: bool = False
    dry_run: bool = False
    exclude_from: List[Path] = field(default_factory=list)
    output: Optional[Path] = None
    verbose: bool = False

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "ScanConfig":
        """Build a configuration from parsed command-line arguments."""
        return cls(
            directory=Path(args.directory),
            exclude=list(args.exclude or []),
            disable_categories=split_ids(args.disable_category or []),
            no_defaults=args.no_defaults,
            dry_run=args.dry_run,
            exclude_from=[Path(p) for p in args.exclude_from or []],
            output=args.output,
            verbose=args.verbose,
        )

    def validate(self) -> None:
        """Reject configuration errors before any traversal starts.

        Raises:
            InvalidCategoryError: If a disabled category ID is not in the catalog.
            DirectoryNotFoundError: If the directory to scan does not exist.
        """
        invalid = validate_category_ids(self.disable_categories)
        if invalid:
            raise InvalidCategoryError(invalid)
        if not self.directory.exists():
            raise DirectoryNotFoundError(self.directory)

    def build_filter(self) -> Filter:
        """Validate the configuration and create the exclusion filter it describes.

        Raises:
            InvalidCategoryError: If a disabled category ID is not in the catalog.
            DirectoryNotFoundError: If the directory to scan does not exist.
            FileNotFoundError: If an ``exclude_from`` file does not exist.
        """
        self.validate()

        ignore_rules = GitIgnoreExclusionRules(self.exclude_from) if self.exclude_from else None
        if self.no_defaults:
            return Filter.from_patterns(self.exclude, ignore_rules)
        return Filter.with_defaults(self.exclude, self.disable_categories, ignore_rules)
