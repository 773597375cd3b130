"""
Severity resolution for outdated dependencies.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional

from ..models.analysis import Analysis
from ..models.config import FilterConfig, SeverityDefaults
from ..models.dependency import Availability, Dependency
from ..models.result import Issue
from ..models.severity import SeverityLevel
from ..utils.logging import LoggerMixin
from .patterns import ArtifactCoordinate, ArtifactFilter, build_filter

MESSAGE_PREFIXES = {
    Availability.INCREMENTAL: "Patch",
    Availability.MINOR: "Minor update",
    Availability.MAJOR: "Major update",
}


def format_message(dependency: Dependency, dependency_management: bool = False) -> str:
    """Describe the update available for ``dependency``."""
    prefix = MESSAGE_PREFIXES.get(dependency.availability)
    if prefix is None:
        raise ValueError(f"No update available for {dependency}")
    suffix = " (see dependency management)" if dependency_management else ""
    return (
        f"{prefix} available for dependency {dependency.coordinates}{suffix}. "
        f"Next version is {dependency.next}. Latest version is {dependency.last}."
    )


@dataclass(frozen=True)
class SeverityResolver(LoggerMixin):
    """
    Decides whether a dependency raises an issue and at which severity.

    Resolution order:

    1. dependencies without any newer version never raise an issue;
    2. dependencies not selected by ``inclusions``, or selected by
       ``exclusions``, never raise an issue;
    3. the first matching override wins, checked from BLOCKER down to INFO;
    4. otherwise the default severity of the availability tier applies.
    """

    inclusions: ArtifactFilter
    exclusions: ArtifactFilter
    overrides: tuple[tuple[SeverityLevel, ArtifactFilter], ...]
    defaults: SeverityDefaults

    @classmethod
    def from_config(
        cls,
        filters: Optional[FilterConfig] = None,
        defaults: Optional[SeverityDefaults] = None,
    ) -> "SeverityResolver":
        filters = filters or FilterConfig()
        overrides = (
            (SeverityLevel.BLOCKER, build_filter(filters.override_blocker)),
            (SeverityLevel.CRITICAL, build_filter(filters.override_critical)),
            (SeverityLevel.MAJOR, build_filter(filters.override_major)),
            (SeverityLevel.MINOR, build_filter(filters.override_minor)),
            (SeverityLevel.INFO, build_filter(filters.override_info)),
        )
        return cls(
            inclusions=build_filter(filters.inclusions),
            exclusions=build_filter(filters.exclusions),
            overrides=overrides,
            defaults=defaults or SeverityDefaults(),
        )

    def severity(self, dependency: Dependency) -> Optional[SeverityLevel]:
        """Return the severity of the issue for ``dependency``, or None for no issue."""
        if dependency.availability is Availability.NONE:
            return None

        coordinate = ArtifactCoordinate.from_dependency(dependency)
        if not self.inclusions.include(coordinate):
            return None
        if self.exclusions.include(coordinate):
            self.log_debug("Dependency excluded", dependency=dependency.coordinates)
            return None

        for severity, override in self.overrides:
            if override.include(coordinate):
                return severity

        if dependency.availability is Availability.INCREMENTAL:
            return self.defaults.incremental
        if dependency.availability is Availability.MINOR:
            return self.defaults.minor
        if dependency.availability is Availability.MAJOR:
            return self.defaults.major
        return None

    def issues(self, analysis: Analysis) -> Iterator[Issue]:
        """Yield issues for dependency managements, then dependencies."""
        groups = (
            (analysis.dependency_managements, True),
            (analysis.dependencies, False),
        )
        for dependencies, dependency_management in groups:
            for dependency in dependencies:
                severity = self.severity(dependency)
                if severity is None:
                    continue
                yield Issue(
                    dependency=dependency,
                    severity=severity,
                    message=format_message(dependency, dependency_management),
                    dependency_management=dependency_management,
                )
