"""
Data models and validation schemas for dependency updates analysis.
"""

from .analysis import Analysis
from .config import AnalysisConfig, FilterConfig, SeverityDefaults, VersionConfig
from .dependency import Availability, Dependency
from .result import AnalysisResult, Issue, Metrics, Rating
from .severity import SeverityLevel, SeverityStats

__all__ = [
    "Analysis",
    "Availability",
    "Dependency",
    "Issue",
    "Metrics",
    "Rating",
    "AnalysisResult",
    "SeverityLevel",
    "SeverityStats",
    "AnalysisConfig",
    "VersionConfig",
    "SeverityDefaults",
    "FilterConfig",
]
