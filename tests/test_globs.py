"""Tests for the ignore-glob compiler."""

from pathlib import PurePosixPath

import pytest

from txcontext.search.globs import compile_glob, compile_globs, glob_to_regex


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("**/node_modules/**", "node_modules", True),
        ("**/node_modules/**", "web/node_modules/lib/index.js", True),
        ("**/node_modules/**", "node_modules_extra/index.js", False),
        ("**/*.min.js", "app.min.js", True),
        ("**/*.min.js", "static/js/app.min.js", True),
        ("**/*.min.js", "static/js/app.js", False),
        ("**/*.test.*", "src/Button.test.tsx", True),
        ("**/Pods/**", "Pods/Alamofire/Source/Request.swift", True),
        ("src/?.kt", "src/A.kt", True),
        ("src/?.kt", "src/AB.kt", False),
        ("src/*.kt", "src/nested/A.kt", False),
        ("build/**", "build", True),
        ("build/**", "build/outputs/app.apk", True),
        ("build/**", "app/build/outputs/app.apk", False),
    ],
)
def test_compile_glob_matches(pattern: str, path: str, expected: bool) -> None:
    """Verify each glob construct against representative root-relative paths."""
    assert compile_glob(pattern).matches(path) is expected


def test_pattern_without_separator_matches_basename() -> None:
    """A pattern without '/' also matches the last path segment."""
    matcher = compile_glob("*Tests*")
    assert matcher.matches("App/AppTests/LoginTests.swift")
    assert not matcher.matches("App/Login.swift")


def test_leading_dot_slash_is_ignored() -> None:
    """Both the pattern and the path may start with './'."""
    matcher = compile_glob("./build/**")
    assert matcher.matches("./build/tmp/x.kt")
    assert matcher.matches("build/tmp/x.kt")


def test_dot_directories_are_not_stripped() -> None:
    """Only a literal './' prefix is removed; '.git' stays intact."""
    matcher = compile_glob("**/.git/**")
    assert matcher.matches(".git/config")
    assert not matcher.matches("git/config")


def test_accepts_pure_paths() -> None:
    """PurePath inputs are matched in POSIX form."""
    assert compile_glob("**/vendor/**").matches(PurePosixPath("lib/vendor/a.swift"))


def test_regex_metacharacters_are_literal() -> None:
    """Characters like '+' and '(' in a glob are not regex syntax."""
    matcher = compile_glob("c++(old)/*.h")
    assert matcher.matches("c++(old)/a.h")
    assert not matcher.matches("cc(old)/a.h")


def test_glob_to_regex_is_anchored() -> None:
    """The generated expression must match whole paths only."""
    expression = glob_to_regex("*.swift")
    assert expression.startswith("^")
    assert expression.endswith("$")


def test_compile_globs_skips_blank_patterns() -> None:
    """Blank entries in a configured list are ignored."""
    matchers = compile_globs(["**/build/**", "", "   "])
    assert [m.pattern for m in matchers] == ["**/build/**"]
