"""
JSON output writer with formatting options.
"""

import json
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, TextIO

from ..models.result import AnalysisResult, Metrics
from ..utils.exceptions import OutputError
from ..utils.logging import LoggerMixin

FORMAT_VERSION = "1.0"

DATA_FIELDS = ("dependencies_data", "patches_data", "upgrades_data")


@dataclass
class JsonWriteOptions:
    """Options for JSON output formatting."""

    indent: Optional[int] = 2
    sort_keys: bool = True
    ensure_ascii: bool = False
    include_metadata: bool = True
    include_data: bool = True
    compact_format: bool = False


class JsonWriter(LoggerMixin):
    """Writes analysis results to JSON."""

    def __init__(self, options: Optional[JsonWriteOptions] = None):
        """Initialise JSON writer with formatting options."""
        self.options = options or JsonWriteOptions()

    def write_result(self, result: AnalysisResult, output_path: Path) -> None:
        """Write an analysis result to a JSON file."""
        self._write_json_file(self.result_to_dict(result), output_path)
        self.log_info(
            "Analysis result written to JSON",
            output_path=str(output_path),
            issues=len(result.issues),
        )

    def write_metrics(self, metrics: Metrics, output_path: Path) -> None:
        """Write (aggregated) metrics to a JSON file."""
        self._write_json_file(self.metrics_to_dict(metrics), output_path)
        self.log_info("Metrics written to JSON", output_path=str(output_path))

    def dump_result(self, result: AnalysisResult, stream: Optional[TextIO] = None) -> None:
        """Write an analysis result to ``stream`` (stdout by default)."""
        stream = stream or sys.stdout
        try:
            json.dump(self.result_to_dict(result), stream, **self._json_params())
            stream.write("\n")
        except (OSError, TypeError, ValueError) as e:
            raise OutputError(
                f"Failed to write JSON output: {e}", output_format="json"
            ) from e

    def result_to_dict(self, result: AnalysisResult) -> dict[str, Any]:
        """Prepare an analysis result for JSON serialization."""
        result_dict = result.model_dump(mode="json")
        result_dict["metrics"] = self.metrics_to_dict(result.metrics)

        if self.options.include_metadata:
            result_dict["export_metadata"] = {
                "exported_at": datetime.now(timezone.utc).isoformat(),
                "format_version": FORMAT_VERSION,
                "exported_by": "dependency-updates-analyzer",
            }
        return result_dict

    def metrics_to_dict(self, metrics: Metrics) -> dict[str, Any]:
        metrics_dict = metrics.model_dump(mode="json")
        if not self.options.include_data:
            for field in DATA_FIELDS:
                metrics_dict.pop(field, None)
        return metrics_dict

    def _json_params(self) -> dict[str, Any]:
        json_params = {
            "ensure_ascii": self.options.ensure_ascii,
            "sort_keys": self.options.sort_keys,
        }
        if self.options.compact_format:
            json_params["separators"] = (",", ":")
            json_params["indent"] = None
        else:
            json_params["indent"] = self.options.indent
        return json_params

    def _write_json_file(self, data: dict[str, Any], output_path: Path) -> None:
        """Write data to JSON file with configured formatting."""
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, **self._json_params())
                f.write("\n")  # Add trailing newline
        except OSError as e:
            raise OutputError(
                f"OS error writing JSON file {output_path}: {e}",
                output_path=str(output_path),
                output_format="json",
            ) from e
        except (TypeError, ValueError) as e:
            raise OutputError(
                f"JSON serialization error for {output_path}: {e}",
                output_path=str(output_path),
                output_format="json",
            ) from e
