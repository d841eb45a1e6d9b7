import pytest

from context_generator.exclusion_rules.pattern_matcher import compile_pattern, has_wildcards, matches


@pytest.mark.parametrize(
    "pattern,candidate,expected",
    [
        ("*.log", "debug.log", True),
        ("*.log", "debug.log.1", False),
        ("*.log", "logs/debug.log", True),
        ("file?.txt", "file1.txt", True),
        ("file?.txt", "file10.txt", False),
        ("[abc].py", "b.py", True),
        ("[abc].py", "d.py", False),
        ("[!abc].py", "d.py", True),
        ("[!abc].py", "a.py", False),
        ("node_modules", "node_modules", True),
        ("node_modules", "node_modules_backup", False),
        ("docs/_build", "docs/_build", True),
        ("docs/_build", "project/docs/_build", False),
        ("cmake-build-*", "cmake-build-debug", True),
        (".env.*", ".env.local", True),
        (".env.*", ".env", False),
        ("*~", "notes.txt~", True),
    ],
)
def test_matches(pattern, candidate, expected):
    assert matches(pattern, candidate) == expected


def test_star_crosses_path_separators():
    assert matches("src/*.py", "src/pkg/module.py")
    assert matches("*", "a/b/c")


def test_matching_is_case_sensitive():
    assert matches("Makefile", "Makefile")
    assert not matches("Makefile", "makefile")
    assert not matches("*.LOG", "debug.log")


def test_whole_candidate_must_match():
    assert not matches("build", "build.gradle")
    assert not matches("build", "mybuild")


@pytest.mark.parametrize("pattern", ["[abc", "file[", "[!", "a[b]c[d"])
def test_malformed_patterns_match_nothing(pattern):
    assert compile_pattern(pattern) is None
    assert not matches(pattern, pattern)
    assert not matches(pattern, "a")


def test_empty_pattern_matches_only_empty_candidate():
    assert matches("", "")
    assert not matches("", "a")


@pytest.mark.parametrize(
    "pattern,expected",
    [
        ("*.pyc", True),
        ("file?.txt", True),
        ("[abc].py", True),
        ("cmake-build-*", True),
        ("node_modules", False),
        ("docs/_build", False),
        (".env", False),
    ],
)
def test_has_wildcards(pattern, expected):
    assert has_wildcards(pattern) == expected
