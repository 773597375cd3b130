"""
Utility modules for the dependency updates analyzer.
"""

from .exceptions import (
    AnalysisStateError,
    ConfigurationError,
    DependencyUpdatesError,
    InvalidPatternError,
    MalformedInputError,
    MissingReportError,
    OutputError,
    ParseError,
    ReportError,
    UnknownStatusWarning,
)
from .logging import LoggerMixin, get_logger, setup_logging

__all__ = [
    "DependencyUpdatesError",
    "ReportError",
    "MissingReportError",
    "MalformedInputError",
    "ParseError",
    "InvalidPatternError",
    "ConfigurationError",
    "AnalysisStateError",
    "OutputError",
    "UnknownStatusWarning",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
