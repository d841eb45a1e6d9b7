"""Human- and script-readable listings of the exclusion catalog."""

from typing import List, TextIO

from context_generator.exceptions import InvalidCategoryError
from context_generator.exclusion_rules.catalog import all_categories, all_patterns, get_category
from context_generator.exclusion_rules.pattern_matcher import has_wildcards

from .argparser import PROG


def print_exclusions(out: TextIO) -> None:
    """Print every category with its description and sorted patterns, then a summary."""
    categories = all_categories()

    print("Default Exclusions by Category", file=out)
    print("==============================", file=out)

    for i, category in enumerate(categories):
        if i > 0:
            print(file=out)
        print(f"ID: {category.id} - {category.name}", file=out)
        print(f"Description: {category.description}", file=out)
        print("Patterns:", file=out)
        for pattern in sorted(category.patterns):
            print(f"  {pattern}", file=out)

    print("\nSummary:", file=out)
    print(f"  Total categories: {len(categories)}", file=out)
    print(f"  Total patterns: {len(all_patterns())}", file=out)

    print("\nUsage:", file=out)
    print("  --disable-category <id>     Disable a specific category", file=out)
    print("  --disable-category go,vcs   Disable multiple categories", file=out)

    print("\nExamples:", file=out)
    print(f"  {PROG} --disable-category go     # Include go.sum and Go test files", file=out)
    print(f"  {PROG} --disable-category vcs    # Include .git directory contents", file=out)
    print(f"  {PROG} --disable-category logs   # Include log files", file=out)


def print_patterns_only(out: TextIO) -> None:
    """Print every catalog pattern, wildcard patterns first, then literals, each sorted.

    Patterns listed by several categories are printed once per category.
    """
    wildcards: List[str] = []
    literals: List[str] = []
    for pattern in all_patterns():
        (wildcards if has_wildcards(pattern) else literals).append(pattern)

    for pattern in sorted(wildcards) + sorted(literals):
        print(pattern, file=out)


def print_category_exclusions(out: TextIO, category_id: str) -> None:
    """Print the sorted patterns of one category.

    Raises:
        InvalidCategoryError: If no category has this ID.
    """
    category = get_category(category_id)
    if category is None:
        raise InvalidCategoryError([category_id])

    for pattern in sorted(category.patterns):
        print(pattern, file=out)
