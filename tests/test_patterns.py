"""Tests for artifact pattern matching and filters."""

import logging

import pytest

from dependency_updates_analyzer.core.patterns import (
    ArtifactCoordinate,
    ArtifactPattern,
    EverythingFilter,
    NothingFilter,
    PatternArtifactFilter,
    PatternKind,
    TokenPattern,
    build_filter,
    match,
    split_patterns,
)
from dependency_updates_analyzer.utils.exceptions import ConfigurationError
from tests.conftest import make_dependency


def coordinate(
    group_id="com.acme",
    artifact_id="widget",
    type="jar",
    version="1.0.0",
    scope=None,
    classifier=None,
) -> ArtifactCoordinate:
    return ArtifactCoordinate(group_id, artifact_id, type, version, scope, classifier)


@pytest.mark.parametrize(
    ("token", "pattern", "expected"),
    [
        ("foo-lib", "*", True),
        ("foo-lib", "*-lib", True),
        ("foo-lib", "foo-*", True),
        ("foo-lib", "*oo-li*", True),
        ("foo-lib", "foo-lib", True),
        ("bar", "foo", False),
        ("foo-lib", "*-core", False),
        ("foo-lib", "bar-*", False),
        ("1.5", "[1.0,2.0)", True),
        ("2.0", "[1.0,2.0)", False),
        ("2.0-M2", "[2.0.0-M1,)", True),
        ("1.5", "[1.0", False),
        (None, "*", True),
        (None, "test", False),
        ("", "", True),
    ],
)
def test_match(token, pattern: str, expected: bool) -> None:
    assert match(token, pattern) is expected


@pytest.mark.parametrize(
    ("pattern", "kind"),
    [
        ("*", PatternKind.ANY),
        ("", PatternKind.ANY),
        ("*oo*", PatternKind.CONTAINS),
        ("*-lib", PatternKind.SUFFIX),
        ("foo-*", PatternKind.PREFIX),
        ("[1.0,2.0)", PatternKind.RANGE),
        ("[1.0", PatternKind.INVALID_RANGE),
        ("foo", PatternKind.EXACT),
    ],
)
def test_token_pattern_kind(pattern: str, kind: PatternKind) -> None:
    assert TokenPattern.compile(pattern).kind is kind


def test_range_never_matches_missing_version() -> None:
    assert not TokenPattern.compile("[1.0,2.0)").matches(None)


class TestArtifactPattern:
    def test_missing_segments_match_anything(self) -> None:
        assert ArtifactPattern.parse("com.acme").matches(coordinate())
        assert ArtifactPattern.parse("com.acme:widget").matches(coordinate())
        assert not ArtifactPattern.parse("com.acme:gadget").matches(coordinate())

    def test_all_six_segments(self) -> None:
        pattern = ArtifactPattern.parse("com.acme:widget:jar:[1.0,2.0):test:sources")
        assert pattern.matches(coordinate(scope="test", classifier="sources"))
        assert not pattern.matches(coordinate(scope="compile", classifier="sources"))

    def test_empty_segments_match_anything(self) -> None:
        assert ArtifactPattern.parse(":::::").matches(coordinate(scope="test"))
        assert ArtifactPattern.parse("::jar").matches(coordinate())
        assert not ArtifactPattern.parse("::pom").matches(coordinate())

    def test_absent_scope_matches_only_wildcards(self) -> None:
        assert not ArtifactPattern.parse("::::test").matches(coordinate())
        assert ArtifactPattern.parse("::::*").matches(coordinate())

    def test_trailing_empty_segments_are_dropped(self) -> None:
        assert len(ArtifactPattern.parse("com.acme:::::::").segments) == 1

    def test_too_many_segments(self) -> None:
        with pytest.raises(ConfigurationError):
            ArtifactPattern.parse("a:b:c:d:e:f:g")


def test_coordinate_from_dependency_uses_base_version() -> None:
    dependency = make_dependency(version="1.0-20240101.120000-3", scope="test")
    coord = ArtifactCoordinate.from_dependency(dependency)

    assert coord == ("com.acme", "widget", "jar", "1.0-SNAPSHOT", "test", None)


@pytest.mark.parametrize(
    ("patterns", "expected"),
    [
        ("a:b, c:d", ["a:b", "c:d"]),
        (" , a ,, ", ["a"]),
        ("", []),
        ("::::[1.0,2.0),org.x", ["::::[1.0,2.0)", "org.x"]),
        ("::::(,1.0],[1.2,)", ["::::(,1.0],[1.2,)"]),
        (
            "a:b::(,1.0],[1.2,), org.x",
            ["a:b::(,1.0],[1.2,)", "org.x"],
        ),
    ],
)
def test_split_patterns(patterns: str, expected: list[str]) -> None:
    assert split_patterns(patterns) == expected


class TestFilters:
    def test_pattern_filter_matches_any_pattern(self) -> None:
        artifact_filter = PatternArtifactFilter.from_string("org.other, com.acme:wid*")

        assert artifact_filter.include(coordinate())
        assert not artifact_filter.include(coordinate(group_id="io.example"))

    def test_blank_patterns_build_nothing_filter(self) -> None:
        assert isinstance(build_filter(""), NothingFilter)
        assert isinstance(build_filter(None), NothingFilter)
        assert isinstance(build_filter(" , "), NothingFilter)
        assert not build_filter("").include(coordinate())

    def test_blank_patterns_with_explicit_fallback(self) -> None:
        fallback = EverythingFilter()
        assert build_filter("", when_empty=fallback) is fallback
        assert fallback.include(coordinate())

    def test_default_inclusions_select_everything(self) -> None:
        assert build_filter(":::::").include(coordinate(scope="runtime"))

    def test_malformed_range_is_logged_and_never_matches(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            artifact_filter = build_filter("::::[1.0")

        assert not artifact_filter.include(coordinate(version="1.0"))
        assert "Ignoring malformed version ranges" in caplog.text
