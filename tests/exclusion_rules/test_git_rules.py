import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from context_generator.exclusion_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def gitignore(tmp_path: Path) -> Path:
    path = tmp_path / ".gitignore"
    path.write_text("*.txt\n!important.txt\nsubdir/\n*.py[cod]\n**/__pycache__/\n")
    return path


@pytest.fixture
def npmignore(tmp_path: Path) -> Path:
    path = tmp_path / ".npmignore"
    path.write_text("*.log\nnode_modules/\n!important.log\n")
    return path


@pytest.mark.parametrize(
    "path,expected",
    [
        ("file.txt", True),
        ("important.txt", False),
        ("file.py", False),
        ("subdir/file.py", True),
        ("subdir/", True),
        ("subdir/important.txt", True),
        ("another_dir/file.txt", True),
        ("another_dir/file.py", False),
        ("nested/subdir/file.txt", True),
        ("file.pyc", True),
        ("__pycache__/cache_file.py", True),
        ("lib/__pycache__/cache_file.py", True),
    ],
)
def test_gitignore_exclusion_rules(gitignore, path, expected):
    rules = GitIgnoreExclusionRules(gitignore)
    assert rules.exclude(path) == expected, f"Failed for path: {path}"


def test_empty_file_excludes_nothing(tmp_path):
    empty = tmp_path / "empty"
    empty.write_text("")
    rules = GitIgnoreExclusionRules(empty)
    assert len(rules) == 0
    assert not rules.exclude("any_file.txt")


def test_nonexistent_file():
    with pytest.raises(FileNotFoundError):
        GitIgnoreExclusionRules("nonexistent_file")


def test_multiple_files_are_combined_in_order(gitignore, npmignore):
    rules = GitIgnoreExclusionRules([gitignore, npmignore])

    assert rules.exclude("file.txt")
    assert not rules.exclude("important.txt")
    assert rules.exclude("debug.log")
    assert not rules.exclude("important.log")
    assert rules.exclude("node_modules/package.json")


def test_load_rules_incrementally(gitignore, npmignore):
    rules = GitIgnoreExclusionRules(gitignore)
    assert not rules.exclude("debug.log")

    rules.load_rules(npmignore)

    assert rules.exclude("file.txt")
    assert rules.exclude("debug.log")


def test_input_type_handling(gitignore):
    assert GitIgnoreExclusionRules(str(gitignore)).exclude("file.txt")
    assert GitIgnoreExclusionRules(gitignore).exclude("file.txt")
    assert GitIgnoreExclusionRules([gitignore]).exclude("file.txt")
    assert not GitIgnoreExclusionRules(None).exclude("file.txt")
    assert not GitIgnoreExclusionRules([]).exclude("file.txt")


def test_add_rule_order():
    """The last matching rule decides, so negations only work after the rule they undo."""
    rules1 = GitIgnoreExclusionRules()
    rules1.add_rule("*.md")
    rules1.add_rule("!README.md")

    rules2 = GitIgnoreExclusionRules()
    rules2.add_rule("!README.md")
    rules2.add_rule("*.md")

    assert not rules1.exclude("README.md")
    assert rules1.exclude("CONTRIBUTING.md")
    assert rules2.exclude("README.md")


def test_add_rule_directory_patterns():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("node_modules/")

    assert rules.exclude("node_modules/")
    assert rules.exclude("node_modules/index.js")
    assert rules.exclude("project/node_modules/module.js")
    assert not rules.exclude("node_modules")
    assert not rules.exclude("nodemodules.txt")


def test_complex_patterns():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("**/*.min.js")
    rules.add_rule("**/node_modules/**")
    rules.add_rule("build-*/")
    rules.add_rule("!build-config/")

    assert rules.exclude("dist/app.min.js")
    assert rules.exclude("project/node_modules/package.json")
    assert rules.exclude("build-output/result.txt")
    assert not rules.exclude("build-config/settings.json")
    assert not rules.exclude("normal.js")


def test_empty_or_comment_pattern():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("")
    rules.add_rule("# This is a comment")

    assert len(rules) == 0
    assert not rules.exclude("# This is a comment")


def test_matching_rule_reports_the_decisive_rule():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.log")
    rules.add_rule("logs/")

    assert rules.matching_rule("debug.log") == "*.log"
    assert rules.matching_rule("logs/") == "logs/"
    assert rules.matching_rule("logs/debug.log") == "logs/"
    assert rules.matching_rule("README.md") is None


def test_malformed_rule_is_skipped_with_warning(caplog):
    rules = GitIgnoreExclusionRules()
    with patch(
        "context_generator.exclusion_rules.git_rules.GitWildMatchPattern", side_effect=ValueError("bad pattern")
    ):
        with caplog.at_level(logging.WARNING, logger="context_generator.exclusion_rules.git_rules"):
            rules.add_rule("[broken")

    assert len(rules) == 0
    assert "Ignoring malformed ignore rule '[broken'" in caplog.text

    rules.add_rule("*.tmp")
    assert rules.exclude("cache.tmp")
