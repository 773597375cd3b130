"""
Main analysis orchestrator for dependency updates reports.
"""

import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional

from ..io.content_reader import ContentReader
from ..io.json_writer import JsonWriter
from ..io.report_file import ReportFile
from ..models.analysis import Analysis
from ..models.config import AnalysisConfig
from ..models.dependency import Availability
from ..models.result import AnalysisResult, Metrics
from ..models.severity import SeverityStats
from ..utils.exceptions import (
    DependencyUpdatesError,
    MalformedInputError,
    MissingReportError,
    ParseError,
)
from ..utils.logging import LoggerMixin
from .metrics import MetricsCalculator
from .parser import ReportParser
from .resolver import SeverityResolver


class DependencyUpdatesAnalyzer(LoggerMixin):
    """
    Main orchestrator for dependency updates analysis.

    This class coordinates the entire analysis:
    1. Locating and reading the report
    2. Parsing it into an Analysis
    3. Resolving issue severities for outdated dependencies
    4. Calculating metrics and ratings
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """Initialise the analyzer from configuration."""
        self.config = config or AnalysisConfig()
        self.reader = ContentReader()
        self.parser = ReportParser(self.config.versions)
        self.resolver = SeverityResolver.from_config(
            self.config.filters, self.config.severities
        )
        self.metrics_calculator = MetricsCalculator.for_scheme(
            self.config.rating_scheme
        )
        self.json_writer = JsonWriter()

        # Analysis state
        self.processing_errors: list[str] = []
        self.skipped_reports: list[str] = []

    def analyze(
        self, report_path: Optional[Path] = None, base_dir: Optional[Path] = None
    ) -> Optional[AnalysisResult]:
        """
        Analyze one report.

        Args:
            report_path: Report to analyze, defaults to the configured path
            base_dir: Directory relative report paths are resolved against

        Returns:
            The analysis result, or None when the report does not exist

        Raises:
            MalformedInputError: If the report cannot be read
            ParseError: If the report is not a valid dependency updates report
        """
        report = ReportFile(report_path or self.config.report_path, base_dir)
        self.log_operation("dependency updates analysis", report_path=report.path)
        start_time = time.time()

        try:
            path = report.check()
            read_result = self.reader.read_report(path)
            analysis = self.parser.parse(read_result.content, str(path))
        except MissingReportError as e:
            self.log_info("Analysis skipped due to missing report file", reason=e)
            self.skipped_reports.append(str(report.path))
            return None
        except MalformedInputError as e:
            self.log_warning("Analysis aborted due to: IO errors", error=e)
            self.processing_errors.append(str(e))
            raise
        except ParseError as e:
            self.log_warning("Analysis aborted due to: XML is not valid", error=e)
            self.processing_errors.append(str(e))
            raise

        result = self.evaluate(analysis, str(report.path))
        self.log_success(
            "dependency updates analysis",
            dependencies=result.metrics.dependencies,
            issues=len(result.issues),
            processing_time_seconds=round(time.time() - start_time, 3),
        )
        return result

    def analyze_many(self, report_paths: Iterable[Path]) -> list[AnalysisResult]:
        """
        Analyze several reports, one result per readable report.

        A report that cannot be read or parsed is skipped; its error is
        kept in ``processing_errors``.
        """
        results = []
        for report_path in report_paths:
            try:
                result = self.analyze(report_path)
            except DependencyUpdatesError:
                continue
            if result is not None:
                results.append(result)
        return results

    def evaluate(
        self, analysis: Analysis, report_path: Optional[str] = None
    ) -> AnalysisResult:
        """Resolve issues and calculate metrics for a finalized analysis."""
        issues = list(self.resolver.issues(analysis))

        severity_stats = SeverityStats()
        for issue in issues:
            severity_stats.add_severity(issue.severity)

        return AnalysisResult(
            report_path=report_path,
            issues=issues,
            metrics=self.metrics_calculator.calculate(analysis),
            severity_stats=severity_stats,
            availability_counts={
                Availability.NONE.name.lower(): analysis.using_last_version,
                Availability.INCREMENTAL.name.lower(): analysis.next_incremental_available,
                Availability.MINOR.name.lower(): analysis.next_minor_available,
                Availability.MAJOR.name.lower(): analysis.next_major_available,
            },
        )

    def aggregate_metrics(self, results: Iterable[AnalysisResult]) -> Metrics:
        """Combine the metrics of several analyzed modules."""
        return self.metrics_calculator.aggregate(result.metrics for result in results)

    def write_result(self, result: AnalysisResult, output_path: Path) -> Path:
        """Write a result to ``output_path`` as JSON."""
        self.json_writer.write_result(result, output_path)
        return output_path

    def get_analysis_summary(self) -> dict[str, Any]:
        """
        Get summary of analysis problems.

        Returns:
            Summary dictionary with error counts
        """
        return {
            "processing_errors": len(self.processing_errors),
            "skipped_reports": len(self.skipped_reports),
            "errors": self.processing_errors[:10],  # First 10 errors
        }

    def reset_state(self) -> None:
        """Reset analyzer state for a new run."""
        self.processing_errors.clear()
        self.skipped_reports.clear()
