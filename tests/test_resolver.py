"""Tests for severity resolution and issue generation."""

import pytest

from dependency_updates_analyzer.core.resolver import SeverityResolver, format_message
from dependency_updates_analyzer.models.analysis import Analysis
from dependency_updates_analyzer.models.config import FilterConfig, SeverityDefaults
from dependency_updates_analyzer.models.severity import SeverityLevel
from tests.conftest import make_dependency


def resolver(**filters) -> SeverityResolver:
    return SeverityResolver.from_config(FilterConfig(**filters), SeverityDefaults())


WIDGET_MAJOR = make_dependency("widget", majors=["2.0.0"])


def test_no_update_means_no_issue() -> None:
    assert resolver().severity(make_dependency()) is None


@pytest.mark.parametrize(
    ("dependency", "expected"),
    [
        (make_dependency(incrementals=["1.0.1"]), SeverityLevel.MINOR),
        (make_dependency(minors=["1.1.0"]), SeverityLevel.MAJOR),
        (make_dependency(majors=["2.0.0"]), SeverityLevel.CRITICAL),
    ],
)
def test_tier_defaults(dependency, expected: SeverityLevel) -> None:
    assert resolver().severity(dependency) is expected


def test_configured_tier_defaults() -> None:
    custom = SeverityResolver.from_config(
        FilterConfig(), SeverityDefaults(incremental="info", minor="minor", major="blocker")
    )

    assert custom.severity(make_dependency(incrementals=["1.0.1"])) is SeverityLevel.INFO
    assert custom.severity(make_dependency(minors=["1.1.0"])) is SeverityLevel.MINOR
    assert custom.severity(WIDGET_MAJOR) is SeverityLevel.BLOCKER


def test_blocker_override_wins() -> None:
    blocker = SeverityResolver.from_config(
        FilterConfig(inclusions="*", exclusions="", override_blocker="com.acme:*"),
        SeverityDefaults(major="CRITICAL"),
    )

    assert blocker.severity(WIDGET_MAJOR) is SeverityLevel.BLOCKER


def test_exclusions_beat_overrides() -> None:
    excluded = resolver(
        inclusions="*", exclusions="com.acme:*", override_blocker="com.acme:widget"
    )

    assert excluded.severity(WIDGET_MAJOR) is None
    assert excluded.severity(make_dependency(incrementals=["1.0.1"])) is None


def test_blank_inclusions_include_nothing() -> None:
    assert resolver(inclusions="").severity(WIDGET_MAJOR) is None


def test_not_included_means_no_issue() -> None:
    assert resolver(inclusions="org.other:*").severity(WIDGET_MAJOR) is None


def test_overrides_checked_from_blocker_down() -> None:
    both = resolver(override_info="com.acme", override_critical="com.acme:widget")
    info_only = resolver(override_info="com.acme")

    assert both.severity(make_dependency(minors=["1.1.0"])) is SeverityLevel.CRITICAL
    assert info_only.severity(WIDGET_MAJOR) is SeverityLevel.INFO


def test_version_range_override() -> None:
    ranged = resolver(override_minor=":::[1.0,2.0)")

    assert ranged.severity(WIDGET_MAJOR) is SeverityLevel.MINOR
    assert (
        ranged.severity(make_dependency(version="2.5", majors=["3.0"]))
        is SeverityLevel.CRITICAL
    )


def test_multi_restriction_range_override() -> None:
    split_range = resolver(override_blocker="com.acme:widget::(,1.0],[1.2,)")

    assert (
        split_range.severity(make_dependency(version="1.3", incrementals=["1.3.1"]))
        is SeverityLevel.BLOCKER
    )
    assert (
        split_range.severity(make_dependency(version="1.1", incrementals=["1.1.1"]))
        is SeverityLevel.MINOR
    )


def test_malformed_range_override_never_matches() -> None:
    malformed = resolver(inclusions="*", override_blocker="::::[1.0")

    assert malformed.severity(WIDGET_MAJOR) is SeverityLevel.CRITICAL


def test_scope_and_classifier_overrides() -> None:
    scoped = resolver(override_info="::::test", override_major=":::::sources")

    assert scoped.severity(make_dependency(majors=["2.0"], scope="test")) is SeverityLevel.INFO
    assert (
        scoped.severity(make_dependency(majors=["2.0"], classifier="sources"))
        is SeverityLevel.MAJOR
    )
    assert scoped.severity(make_dependency(majors=["2.0"])) is SeverityLevel.CRITICAL


class TestIssues:
    @pytest.fixture
    def analysis(self) -> Analysis:
        return Analysis(
            dependencies=[
                make_dependency("direct", incrementals=["1.0.1"]),
                make_dependency("current"),
            ],
            dependency_managements=[
                make_dependency("managed", minors=["1.1.0", "1.2.0"]),
            ],
        ).finalize()

    def test_issues_for_managements_then_dependencies(self, analysis) -> None:
        issues = list(resolver().issues(analysis))

        assert [i.dependency.artifact_id for i in issues] == ["managed", "direct"]
        assert [i.dependency_management for i in issues] == [True, False]
        assert [i.severity for i in issues] == [SeverityLevel.MAJOR, SeverityLevel.MINOR]

    def test_issue_messages(self, analysis) -> None:
        managed, direct = resolver().issues(analysis)

        assert managed.message == (
            "Minor update available for dependency com.acme:managed:1.0.0 "
            "(see dependency management). Next version is 1.1.0. "
            "Latest version is 1.2.0."
        )
        assert direct.message == (
            "Patch available for dependency com.acme:direct:1.0.0. "
            "Next version is 1.0.1. Latest version is 1.0.1."
        )
        assert str(direct) == f"[MINOR] {direct.message}"

    def test_resolution_is_idempotent(self, analysis) -> None:
        severity_resolver = resolver(override_info="com.acme:direct")

        first = [(i.dependency, i.severity) for i in severity_resolver.issues(analysis)]
        second = [(i.dependency, i.severity) for i in severity_resolver.issues(analysis)]

        assert first == second


def test_major_message() -> None:
    assert format_message(WIDGET_MAJOR).startswith(
        "Major update available for dependency com.acme:widget:1.0.0."
    )


def test_message_requires_an_update() -> None:
    with pytest.raises(ValueError):
        format_message(make_dependency())


def test_resolver_is_immutable() -> None:
    with pytest.raises(AttributeError):
        resolver().inclusions = None
