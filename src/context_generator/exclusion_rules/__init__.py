"""Exclusion rules for filtering files and directories."""

from .catalog import (
    CUSTOM_CATEGORY,
    ExclusionCategory,
    all_categories,
    all_patterns,
    category_name_for_pattern,
    filtered_patterns,
    get_category,
    validate_category_ids,
)
from .filter import IGNORE_FILE_CATEGORY, ExclusionReason, Filter
from .git_rules import GitIgnoreExclusionRules
from .pattern_matcher import matches

__all__ = [
    "CUSTOM_CATEGORY",
    "IGNORE_FILE_CATEGORY",
    "ExclusionCategory",
    "ExclusionReason",
    "Filter",
    "GitIgnoreExclusionRules",
    "all_categories",
    "all_patterns",
    "category_name_for_pattern",
    "filtered_patterns",
    "get_category",
    "matches",
    "validate_category_ids",
]
