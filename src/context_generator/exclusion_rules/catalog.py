"""Catalog of default exclusion categories.

The categories live in ``exclusions.yaml`` next to this module. The file is parsed
once, on first use, into an immutable tuple of :class:`ExclusionCategory` records
that is shared by every caller for the rest of the process.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import yaml

from context_generator.exceptions import CatalogError

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(__file__).parent / "exclusions.yaml"

# Category name reported for patterns that do not come from the catalog
CUSTOM_CATEGORY = "Custom"


@dataclass(frozen=True)
class ExclusionCategory:
    """A named group of exclusion patterns sharing a theme.

    Attributes:
        id: Short unique identifier used on the command line (e.g. ``"go"``).
        name: Human-readable name (e.g. ``"Go Specific"``).
        description: One-line description of what the category covers.
        patterns: Glob patterns in catalog order.
    """

    id: str
    name: str
    description: str
    patterns: Tuple[str, ...]


def _parse_category(entry: Any, index: int) -> ExclusionCategory:
    if not isinstance(entry, dict):
        raise CatalogError(f"Category #{index} must be a mapping, got {type(entry).__name__}")

    missing = [key for key in ("id", "name", "description", "patterns") if key not in entry]
    if missing:
        raise CatalogError(f"Category #{index} is missing: {', '.join(missing)}")

    patterns = entry["patterns"]
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise CatalogError(f"Category '{entry['id']}' patterns must be a list of strings")

    return ExclusionCategory(
        id=str(entry["id"]),
        name=str(entry["name"]),
        description=str(entry["description"]),
        patterns=tuple(patterns),
    )


def load_categories(path: Path = CATALOG_PATH) -> Tuple[ExclusionCategory, ...]:
    """Parse an exclusion catalog file.

    Args:
        path: Path to a YAML file with a top-level ``categories`` list.

    Returns:
        The categories in file order.

    Raises:
        CatalogError: If the file cannot be read or parsed, an entry is malformed, or
            two categories share an ID.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Failed to load exclusion catalog {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("categories"), list):
        raise CatalogError(f"Exclusion catalog {path} must contain a 'categories' list")

    categories = tuple(_parse_category(entry, i) for i, entry in enumerate(data["categories"]))

    seen = set()
    for category in categories:
        if category.id in seen:
            raise CatalogError(f"Duplicate category ID in {path}: {category.id}")
        seen.add(category.id)

    logger.debug("Loaded %d exclusion categories from %s", len(categories), path)
    return categories


@lru_cache(maxsize=None)
def all_categories() -> Tuple[ExclusionCategory, ...]:
    """Return every default exclusion category in catalog order.

    Example:
        >>> [c.id for c in all_categories()][:3]
        ['vcs', 'deps', 'build']
    """
    return load_categories()


def get_category(category_id: str) -> Optional[ExclusionCategory]:
    """Look up a category by its ID.

    Example:
        >>> get_category("go").name
        'Go Specific'
        >>> get_category("cobol") is None
        True
    """
    for category in all_categories():
        if category.id == category_id:
            return category
    return None


def filtered_patterns(disabled_ids: Iterable[str] = ()) -> List[str]:
    """Return the patterns of every category whose ID is not disabled.

    Patterns are concatenated in catalog order. A pattern shared by several
    categories appears once per category; nothing is deduplicated.

    Args:
        disabled_ids: IDs of the categories to leave out. Unknown IDs are ignored.

    Example:
        >>> "go.sum" in filtered_patterns()
        True
        >>> "go.sum" in filtered_patterns(["go"])
        False
    """
    disabled = set(disabled_ids)
    patterns: List[str] = []
    for category in all_categories():
        if category.id in disabled:
            continue
        patterns.extend(category.patterns)
    return patterns


def all_patterns() -> List[str]:
    """Return the patterns of every category, in catalog order, duplicates included."""
    return filtered_patterns(())


def category_name_for_pattern(pattern: str) -> str:
    """Return the name of the first category that lists exactly this pattern.

    Only string equality is considered; the pattern is not matched against anything.

    Example:
        >>> category_name_for_pattern("go.sum")
        'Go Specific'
        >>> category_name_for_pattern("*.my-own-thing")
        'Custom'
    """
    for category in all_categories():
        if pattern in category.patterns:
            return category.name
    return CUSTOM_CATEGORY


def validate_category_ids(ids: Iterable[str]) -> List[str]:
    """Return the IDs that do not name any category, preserving input order.

    Example:
        >>> validate_category_ids(["go", "python"])
        []
        >>> validate_category_ids(["go", "cobol"])
        ['cobol']
    """
    valid = {category.id for category in all_categories()}
    return [category_id for category_id in ids if category_id not in valid]
