"""
Streaming parser for ``dependency-updates-report.xml`` files.
"""

import io
import re
import warnings
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..models.analysis import Analysis
from ..models.config import VersionConfig
from ..models.dependency import (
    Availability,
    Dependency,
    last_available,
    next_available,
)
from ..utils.exceptions import (
    MalformedInputError,
    MissingReportError,
    ParseError,
    UnknownStatusWarning,
)
from ..utils.logging import LoggerMixin

ROOT_ELEMENT = "DependencyUpdatesReport"

# group element -> record element
GROUP_ELEMENTS = {
    "dependencyManagements": "dependencyManagement",
    "dependencies": "dependency",
}

# tier element -> version element
TIER_ELEMENTS = {
    "incrementals": "incremental",
    "minors": "minor",
    "majors": "major",
}

SCALAR_FIELDS = {
    "groupId",
    "artifactId",
    "scope",
    "classifier",
    "type",
    "currentVersion",
    "nextVersion",
    "status",
}

REQUIRED_FIELDS = ("groupId", "artifactId", "currentVersion")

MINOR_PREFIX = re.compile(r"^(\d+\.\d+)")
MAJOR_PREFIX = re.compile(r"^(\d+)")

ReportSource = Union[bytes, BinaryIO]


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _non_null(value: Optional[str]) -> Optional[str]:
    if value is None or value == "" or value == "null":
        return None
    return value


class _Record:
    """Fields and versions collected for one dependency element."""

    def __init__(self, element: str):
        self.element = element
        self.fields: dict[str, str] = {}
        self.tiers: dict[str, list[str]] = {tier: [] for tier in TIER_ELEMENTS}


class ReportParser(LoggerMixin):
    """
    Parses dependency updates reports into an Analysis.

    Two passes are applied to every dependency:

    - versions fully matching the configured exclusion regex are dropped from
      all tiers and from the reported next version;
    - in discrete mode only one minor version per ``major.minor`` and one major
      version per ``major`` is kept (the last one listed).
    """

    def __init__(self, config: Optional[VersionConfig] = None):
        self.config = config or VersionConfig()
        self.exclusion = self.config.compile_exclusion()
        self.discrete = self.config.discrete_minor_major

    def parse(self, report: ReportSource, source: str = "<report>") -> Analysis:
        """Parse a single report and return the finalized analysis."""
        analysis = Analysis()
        self._parse_into(analysis, report, source)
        return analysis.finalize()

    def parse_file(self, path: Path) -> Analysis:
        """Parse the report at ``path``."""
        return self.parse_many([path])

    def parse_many(self, paths: Iterable[Path]) -> Analysis:
        """Parse several reports into one analysis."""
        analysis = Analysis()
        for path in paths:
            try:
                with Path(path).open("rb") as stream:
                    self._parse_into(analysis, stream, str(path))
            except FileNotFoundError as e:
                raise MissingReportError(
                    f"Report does not exist: {e}", str(path)
                ) from e
            except OSError as e:
                raise MalformedInputError(
                    f"Failed to read report: {e}", str(path)
                ) from e
        return analysis.finalize()

    def _parse_into(self, analysis: Analysis, report: ReportSource, source: str) -> None:
        stream = io.BytesIO(report) if isinstance(report, (bytes, bytearray)) else report
        self.log_debug("Parsing report", source=source)

        stack: list[str] = []
        record: Optional[_Record] = None
        counts = {element: 0 for element in GROUP_ELEMENTS}
        try:
            for event, element in ET.iterparse(stream, events=("start", "end")):
                tag = _local_name(element.tag)
                if event == "start":
                    stack.append(tag)
                    if len(stack) == 1 and tag != ROOT_ELEMENT:
                        raise ParseError(
                            f"Expected root element {ROOT_ELEMENT}",
                            source,
                            element=tag,
                        )
                    if len(stack) == 3 and GROUP_ELEMENTS.get(stack[1]) == tag:
                        record = _Record(tag)
                    continue

                depth = len(stack)
                if record is not None:
                    if depth == 4 and tag in SCALAR_FIELDS:
                        record.fields[tag] = "".join(element.itertext()).strip()
                    elif depth == 5 and TIER_ELEMENTS.get(stack[3]) == tag:
                        record.tiers[stack[3]].append(
                            "".join(element.itertext()).strip()
                        )
                    elif depth == 3:
                        dependency = self._build_dependency(record, source)
                        if stack[1] == "dependencyManagements":
                            analysis.add_dependency_management(dependency)
                        else:
                            analysis.add_dependency(dependency)
                        counts[stack[1]] += 1
                        record = None
                if depth >= 3:
                    element.clear()
                stack.pop()
        except ET.ParseError as e:
            raise ParseError(
                f"Report is not valid XML: {e}", source, line_number=e.position[0]
            ) from e
        except OSError as e:
            raise MalformedInputError(f"Failed to read report: {e}", source) from e

        self.log_debug(
            "Report parsed",
            source=source,
            dependencies=counts["dependencies"],
            dependency_managements=counts["dependencyManagements"],
        )

    def _build_dependency(self, record: _Record, source: str) -> Dependency:
        missing = [name for name in REQUIRED_FIELDS if not record.fields.get(name)]
        if missing:
            raise ParseError(
                f"{record.element} without {', '.join(missing)}",
                source,
                element=record.element,
            )

        fields = record.fields
        name = f"{fields['groupId']}:{fields['artifactId']}:{fields['currentVersion']}"

        incrementals = self._filter_versions(record.tiers["incrementals"])
        minors = self._filter_versions(record.tiers["minors"], MINOR_PREFIX)
        majors = self._filter_versions(record.tiers["majors"], MAJOR_PREFIX)

        next_version, availability = next_available(incrementals, minors, majors)

        reported_next = _non_null(fields.get("nextVersion"))
        if reported_next is not None and self._excluded(reported_next):
            self.log_debug(
                "Next version excluded", dependency=name, excluded=reported_next
            )
        elif reported_next != next_version:
            self.log_debug(
                "Next version taken from available versions",
                dependency=name,
                reported=reported_next,
                next=next_version,
            )

        status = fields.get("status")
        if status is not None:
            reported_availability = Availability.from_status(status)
            if reported_availability is None:
                message = f"Unknown status '{status}' for {name}"
                warnings.warn(
                    UnknownStatusWarning(message, {"source": source}), stacklevel=2
                )
                self.log_warning(
                    "Unknown status, availability derived from versions",
                    dependency=name,
                    status=status,
                    availability=availability.name,
                )

        return Dependency(
            group_id=fields["groupId"],
            artifact_id=fields["artifactId"],
            version=fields["currentVersion"],
            scope=_non_null(fields.get("scope")),
            classifier=_non_null(fields.get("classifier")),
            type=fields.get("type") or "jar",
            next=next_version,
            last=last_available(fields["currentVersion"], incrementals, minors, majors),
            availability=availability,
            incrementals=incrementals,
            minors=minors,
            majors=majors,
        )

    def _excluded(self, version: str) -> bool:
        return self.exclusion.fullmatch(version) is not None

    def _filter_versions(
        self, versions: list[str], prefix: Optional[re.Pattern] = None
    ) -> list[str]:
        kept = [v for v in versions if v and not self._excluded(v)]
        if not self.discrete or prefix is None:
            return kept

        representatives: dict[str, str] = {}
        for version in kept:
            match = prefix.match(version)
            key = match.group(1) if match else version
            representatives[key] = version
        return list(representatives.values())
