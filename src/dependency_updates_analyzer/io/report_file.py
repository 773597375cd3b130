"""
Location of the dependency updates report.
"""

from pathlib import Path
from typing import Optional

from ..models.config import DEFAULT_REPORT_PATH
from ..utils.exceptions import MissingReportError
from ..utils.logging import LoggerMixin


class ReportFile(LoggerMixin):
    """A report path, resolved against an optional project directory."""

    def __init__(self, path: Optional[Path] = None, base_dir: Optional[Path] = None):
        path = Path(path) if path is not None else DEFAULT_REPORT_PATH
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        self.path = path

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    def check(self) -> Path:
        """Return the report path, raising MissingReportError when it is unusable."""
        if not self.path.exists():
            raise MissingReportError("Report does not exist", str(self.path))
        if not self.path.is_file():
            raise MissingReportError("Report path is not a file", str(self.path))
        self.log_debug("Using report", report_path=str(self.path))
        return self.path

    def __fspath__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"ReportFile({str(self.path)!r})"
