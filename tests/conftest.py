"""Shared pytest fixtures for dependency updates analyzer tests."""

from pathlib import Path
from typing import Optional

import pytest

from dependency_updates_analyzer.models.dependency import Dependency, next_available

TIER_ELEMENTS = {"incrementals": "incremental", "minors": "minor", "majors": "major"}


def record_xml(
    artifact_id: str,
    version: str = "1.0.0",
    group_id: str = "com.acme",
    element: str = "dependency",
    scope: str = "null",
    classifier: str = "null",
    type: str = "jar",
    next_version: Optional[str] = None,
    status: Optional[str] = None,
    **tiers: list[str],
) -> str:
    """Render one dependency record of a dependency updates report."""
    parts = [
        f"<{element}>",
        f"<groupId>{group_id}</groupId>",
        f"<artifactId>{artifact_id}</artifactId>",
        f"<scope>{scope}</scope>",
        f"<classifier>{classifier}</classifier>",
        f"<type>{type}</type>",
        f"<currentVersion>{version}</currentVersion>",
    ]
    if next_version is not None:
        parts.append(f"<nextVersion>{next_version}</nextVersion>")
    for tier, versions in tiers.items():
        child = TIER_ELEMENTS[tier]
        parts.append(f"<{tier}>")
        parts.extend(f"<{child}>{v}</{child}>" for v in versions)
        parts.append(f"</{tier}>")
    if status is not None:
        parts.append(f"<status>{status}</status>")
    parts.append(f"</{element}>")
    return "".join(parts)


def report_xml(dependencies=(), dependency_managements=()) -> bytes:
    """Render a complete report from rendered records."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        "<DependencyUpdatesReport>"
        "<dependencyManagements>"
        + "".join(dependency_managements)
        + "</dependencyManagements>"
        "<dependencies>" + "".join(dependencies) + "</dependencies>"
        "</DependencyUpdatesReport>"
    ).encode("utf-8")


def make_dependency(
    artifact_id: str = "widget",
    group_id: str = "com.acme",
    version: str = "1.0.0",
    incrementals: Optional[list[str]] = None,
    minors: Optional[list[str]] = None,
    majors: Optional[list[str]] = None,
    **kwargs,
) -> Dependency:
    """Build a Dependency whose next version and availability match its tiers."""
    incrementals = incrementals or []
    minors = minors or []
    majors = majors or []
    next_version, availability = next_available(incrementals, minors, majors)
    return Dependency(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        next=next_version,
        availability=availability,
        incrementals=incrementals,
        minors=minors,
        majors=majors,
        **kwargs,
    )


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_report_path(fixtures_root: Path) -> Path:
    """Return the sample dependency updates report."""
    return fixtures_root / "dependency-updates-report.xml"


@pytest.fixture
def sample_report_bytes(sample_report_path: Path) -> bytes:
    return sample_report_path.read_bytes()


@pytest.fixture
def project_dir(tmp_path: Path, sample_report_path: Path) -> Path:
    """A project directory with the sample report at the default location."""
    target = tmp_path / "target"
    target.mkdir()
    (target / "dependency-updates-report.xml").write_bytes(
        sample_report_path.read_bytes()
    )
    return tmp_path
