"""
Core business logic for dependency updates analysis.

This package contains the report parser, the severity resolver, the rating
engine and the orchestrator tying them together.
"""

from .analyzer import DependencyUpdatesAnalyzer
from .metrics import MetricsCalculator
from .parser import ReportParser
from .patterns import (
    ArtifactCoordinate,
    ArtifactFilter,
    ArtifactPattern,
    EverythingFilter,
    NothingFilter,
    PatternArtifactFilter,
    build_filter,
    match,
)
from .rating import (
    MissedCountRating,
    RatingStrategy,
    RatioRating,
    TieredRating,
    get_rating_strategy,
)
from .resolver import SeverityResolver
from .versions import MavenVersion, VersionRange

__all__ = [
    # Orchestration
    "DependencyUpdatesAnalyzer",
    "ReportParser",
    "SeverityResolver",
    "MetricsCalculator",
    # Pattern matching
    "match",
    "build_filter",
    "ArtifactCoordinate",
    "ArtifactPattern",
    "ArtifactFilter",
    "PatternArtifactFilter",
    "NothingFilter",
    "EverythingFilter",
    # Ratings
    "RatingStrategy",
    "RatioRating",
    "MissedCountRating",
    "TieredRating",
    "get_rating_strategy",
    # Versions
    "MavenVersion",
    "VersionRange",
]
