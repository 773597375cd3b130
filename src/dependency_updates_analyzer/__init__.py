"""
Dependency Updates Analyzer

Reads the dependency updates report of the Maven versions plugin, reports
outdated dependencies as issues with configurable severities and rates how
well a project keeps up with patches and upgrades.
"""

__version__ = "1.0.0"

from .core.analyzer import DependencyUpdatesAnalyzer
from .core.parser import ReportParser
from .core.resolver import SeverityResolver
from .models.analysis import Analysis
from .models.config import AnalysisConfig
from .models.dependency import Availability, Dependency
from .models.result import AnalysisResult, Issue, Metrics, Rating
from .models.severity import SeverityLevel

__all__ = [
    "DependencyUpdatesAnalyzer",
    "ReportParser",
    "SeverityResolver",
    "Analysis",
    "AnalysisConfig",
    "AnalysisResult",
    "Availability",
    "Dependency",
    "Issue",
    "Metrics",
    "Rating",
    "SeverityLevel",
]
