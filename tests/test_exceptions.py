"""Tests for the exception hierarchy and logging helpers."""

import logging

import pytest

from dependency_updates_analyzer.utils.exceptions import (
    ConfigurationError,
    DependencyUpdatesError,
    MalformedInputError,
    MissingReportError,
    ParseError,
    ReportError,
    handle_report_error,
)
from dependency_updates_analyzer.utils.logging import LoggerMixin


def test_details_in_string_form() -> None:
    error = ParseError("Report is not valid XML", "report.xml", line_number=3)

    assert str(error) == "Report is not valid XML (report_path=report.xml, line_number=3)"
    assert isinstance(error, ReportError)
    assert isinstance(error, DependencyUpdatesError)


def test_configuration_error_details() -> None:
    error = ConfigurationError("Invalid", config_field="rating_scheme", config_value="x")

    assert error.details == {"config_field": "rating_scheme", "config_value": "x"}


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (FileNotFoundError("gone"), MissingReportError),
        (PermissionError("denied"), MissingReportError),
        (IsADirectoryError("dir"), MalformedInputError),
        (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid"), MalformedInputError),
        (RuntimeError("boom"), DependencyUpdatesError),
    ],
)
def test_handle_report_error(error: Exception, expected) -> None:
    converted = handle_report_error(error, "report.xml")

    assert type(converted) is expected


def test_handle_report_error_keeps_own_errors() -> None:
    error = ParseError("bad")
    assert handle_report_error(error) is error


class Component(LoggerMixin):
    pass


def test_logger_mixin_formats_context(caplog) -> None:
    component = Component()

    with caplog.at_level(logging.DEBUG):
        component.log_operation("analysis", report="r.xml")
        component.log_error("analysis", ValueError("boom"), report="r.xml")

    assert "Starting analysis (report=r.xml)" in caplog.text
    assert "Failed analysis: boom (report=r.xml)" in caplog.text
    assert component.logger.name.endswith("Component")
