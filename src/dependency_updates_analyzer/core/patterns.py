"""
Artifact pattern matching for inclusion, exclusion and severity overrides.

A pattern has the form ``[groupId]:[artifactId]:[type]:[version]:[scope]:[classifier]``.
Every segment is optional; missing and empty segments match anything. A segment
may be ``*``, a ``*``-prefixed/suffixed partial wildcard, a Maven version range
(``[1.0,2.0)``) or a literal.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from ..models.dependency import Dependency
from ..utils.exceptions import ConfigurationError, InvalidPatternError
from ..utils.logging import LoggerMixin, get_logger
from .versions import VersionRange, base_version

logger = get_logger(__name__)

COORDINATE_FIELDS = (
    "group_id",
    "artifact_id",
    "type",
    "base_version",
    "scope",
    "classifier",
)


class PatternKind(str, Enum):
    """How a single pattern segment is matched against a token."""

    ANY = "any"
    CONTAINS = "contains"
    SUFFIX = "suffix"
    PREFIX = "prefix"
    RANGE = "range"
    INVALID_RANGE = "invalid_range"
    EXACT = "exact"


@dataclass(frozen=True)
class TokenPattern:
    """A pattern segment resolved once into its matching strategy."""

    raw: str
    kind: PatternKind
    operand: str = ""
    version_range: Optional[VersionRange] = None

    @classmethod
    def compile(cls, pattern: str) -> "TokenPattern":
        if pattern == "*" or not pattern:
            return cls(pattern, PatternKind.ANY)
        if len(pattern) >= 2 and pattern.startswith("*") and pattern.endswith("*"):
            return cls(pattern, PatternKind.CONTAINS, pattern[1:-1])
        if pattern.startswith("*"):
            return cls(pattern, PatternKind.SUFFIX, pattern[1:])
        if pattern.endswith("*"):
            return cls(pattern, PatternKind.PREFIX, pattern[:-1])
        if pattern.startswith(("[", "(")):
            try:
                version_range = VersionRange.parse(pattern)
            except InvalidPatternError as e:
                logger.debug(f"Version range never matches: {e}")
                return cls(pattern, PatternKind.INVALID_RANGE, pattern)
            return cls(pattern, PatternKind.RANGE, pattern, version_range)
        return cls(pattern, PatternKind.EXACT, pattern)

    def matches(self, token: Optional[str]) -> bool:
        token = token or ""
        if self.kind is PatternKind.ANY:
            return True
        if self.kind is PatternKind.CONTAINS:
            return self.operand in token
        if self.kind is PatternKind.SUFFIX:
            return token.endswith(self.operand)
        if self.kind is PatternKind.PREFIX:
            return token.startswith(self.operand)
        if self.kind is PatternKind.RANGE:
            return bool(token) and self.version_range.contains(token)
        if self.kind is PatternKind.INVALID_RANGE:
            return False
        return token == self.operand


def match(token: Optional[str], pattern: str) -> bool:
    """Match one token against one pattern segment."""
    return TokenPattern.compile(pattern).matches(token)


class ArtifactCoordinate(NamedTuple):
    """The six coordinate parts a pattern is matched against, in pattern order."""

    group_id: str
    artifact_id: str
    type: Optional[str]
    base_version: Optional[str]
    scope: Optional[str]
    classifier: Optional[str]

    @classmethod
    def from_dependency(cls, dependency: Dependency) -> "ArtifactCoordinate":
        return cls(
            group_id=dependency.group_id,
            artifact_id=dependency.artifact_id,
            type=dependency.type,
            base_version=base_version(dependency.version),
            scope=dependency.scope,
            classifier=dependency.classifier,
        )


@dataclass(frozen=True)
class ArtifactPattern:
    """One colon separated pattern; all given segments must match."""

    raw: str
    segments: tuple[TokenPattern, ...]

    @classmethod
    def parse(cls, pattern: str) -> "ArtifactPattern":
        parts = pattern.split(":")
        while len(parts) > 1 and not parts[-1]:
            parts.pop()
        if len(parts) > len(COORDINATE_FIELDS):
            raise ConfigurationError(
                f"Artifact pattern has more than {len(COORDINATE_FIELDS)} segments",
                config_field="pattern",
                config_value=pattern,
            )
        return cls(pattern, tuple(TokenPattern.compile(part) for part in parts))

    def matches(self, coordinate: ArtifactCoordinate) -> bool:
        return all(
            segment.matches(token) for segment, token in zip(self.segments, coordinate)
        )


def split_patterns(patterns: str) -> list[str]:
    """
    Split a comma separated pattern list, keeping commas inside version ranges.

    A comma between a closing and an opening bracket joins the restrictions
    of one multi-restriction range, as in ``(,1.0],[1.2,)``.
    """
    result = []
    depth = 0
    current = []
    for index, char in enumerate(patterns):
        if char in "[(":
            depth += 1
        elif char in "])":
            depth = max(0, depth - 1)
        if char == "," and depth == 0 and not _joins_restrictions(patterns, index):
            result.append("".join(current))
            current = []
        else:
            current.append(char)
    result.append("".join(current))
    return [p.strip() for p in result if p.strip()]


def _joins_restrictions(patterns: str, index: int) -> bool:
    before = patterns[:index].rstrip()
    after = patterns[index + 1 :].lstrip()
    return before[-1:] in ("]", ")") and after[:1] in ("[", "(")


class ArtifactFilter(ABC, LoggerMixin):
    """Abstract base class for artifact filters."""

    @abstractmethod
    def include(self, coordinate: ArtifactCoordinate) -> bool:
        """Return True if the coordinate is selected by this filter."""
        pass


class NothingFilter(ArtifactFilter):
    """Filter that never selects an artifact."""

    def include(self, coordinate: ArtifactCoordinate) -> bool:
        return False

    def __repr__(self) -> str:
        return "NothingFilter()"


class EverythingFilter(ArtifactFilter):
    """Filter that selects every artifact."""

    def include(self, coordinate: ArtifactCoordinate) -> bool:
        return True

    def __repr__(self) -> str:
        return "EverythingFilter()"


class PatternArtifactFilter(ArtifactFilter):
    """Selects artifacts matching any of a set of artifact patterns."""

    def __init__(self, patterns: Iterable[str]):
        self.patterns: tuple[ArtifactPattern, ...] = tuple(
            ArtifactPattern.parse(p) for p in patterns
        )
        invalid = [
            segment.raw
            for pattern in self.patterns
            for segment in pattern.segments
            if segment.kind is PatternKind.INVALID_RANGE
        ]
        if invalid:
            self.log_warning("Ignoring malformed version ranges", ranges=invalid)

    @classmethod
    def from_string(cls, patterns: str) -> "PatternArtifactFilter":
        return cls(split_patterns(patterns))

    def include(self, coordinate: ArtifactCoordinate) -> bool:
        return any(pattern.matches(coordinate) for pattern in self.patterns)

    def __repr__(self) -> str:
        return f"PatternArtifactFilter({[p.raw for p in self.patterns]!r})"


def build_filter(
    patterns: Optional[str], when_empty: Optional[ArtifactFilter] = None
) -> ArtifactFilter:
    """
    Build a filter from a comma separated pattern list.

    Blank lists produce ``when_empty``, which defaults to a filter matching
    nothing.
    """
    if patterns is None or not split_patterns(patterns):
        return when_empty if when_empty is not None else NothingFilter()
    return PatternArtifactFilter.from_string(patterns)
