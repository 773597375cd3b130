"""
Custom exceptions for the dependency updates analyzer.
"""

from typing import Any, Optional


class DependencyUpdatesError(Exception):
    """Base exception for dependency updates analysis errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ReportError(DependencyUpdatesError):
    """Base exception for problems with a single report."""

    def __init__(self, message: str, report_path: Optional[str] = None):
        details = {}
        if report_path:
            details["report_path"] = report_path
        super().__init__(message, details)
        self.report_path = report_path


class MissingReportError(ReportError):
    """Exception raised when the report does not exist or cannot be accessed."""


class MalformedInputError(ReportError):
    """Exception raised when reading the report fails."""


class ParseError(ReportError):
    """Exception raised when the report is not a valid dependency updates report."""

    def __init__(
        self,
        message: str,
        report_path: Optional[str] = None,
        line_number: Optional[int] = None,
        element: Optional[str] = None,
    ):
        super().__init__(message, report_path)
        if line_number:
            self.details["line_number"] = line_number
        if element:
            self.details["element"] = element
        self.line_number = line_number
        self.element = element


class InvalidPatternError(DependencyUpdatesError):
    """Exception raised when a version range specifier cannot be parsed."""

    def __init__(self, message: str, pattern: Optional[str] = None):
        details = {}
        if pattern is not None:
            details["pattern"] = pattern
        super().__init__(message, details)
        self.pattern = pattern


class ConfigurationError(DependencyUpdatesError):
    """Exception raised when configuration is invalid."""

    def __init__(
        self, message: str, config_field: Optional[str] = None, config_value: Any = None
    ):
        details = {}
        if config_field:
            details["config_field"] = config_field
        if config_value is not None:
            details["config_value"] = str(config_value)
        super().__init__(message, details)
        self.config_field = config_field
        self.config_value = config_value


class AnalysisStateError(DependencyUpdatesError):
    """Exception raised when an analysis is modified after finalization."""


class OutputError(DependencyUpdatesError):
    """Exception raised when output generation fails."""

    def __init__(
        self,
        message: str,
        output_path: Optional[str] = None,
        output_format: Optional[str] = None,
    ):
        details = {}
        if output_path:
            details["output_path"] = output_path
        if output_format:
            details["output_format"] = output_format
        super().__init__(message, details)
        self.output_path = output_path
        self.output_format = output_format


class UnknownStatusWarning(UserWarning):
    """Warning for status literals the report parser does not recognise."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


def handle_report_error(
    error: Exception, report_path: Optional[str] = None
) -> DependencyUpdatesError:
    """Convert generic exceptions raised while reading a report."""
    if isinstance(error, DependencyUpdatesError):
        return error

    if isinstance(error, FileNotFoundError):
        return MissingReportError(f"Report not found: {error}", report_path)
    elif isinstance(error, PermissionError):
        return MissingReportError(f"Permission denied: {error}", report_path)
    elif isinstance(error, UnicodeDecodeError):
        return MalformedInputError(f"Encoding error: {error}", report_path)
    elif isinstance(error, OSError):
        return MalformedInputError(f"I/O error: {error}", report_path)
    else:
        return DependencyUpdatesError(
            f"Unexpected error: {error}",
            details={"error_type": type(error).__name__, "report_path": report_path},
        )
