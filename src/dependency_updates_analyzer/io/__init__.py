"""
Input/Output modules for report access and result output.
"""

from .content_reader import ContentReader, ReadResult
from .json_writer import JsonWriteOptions, JsonWriter
from .report_file import ReportFile

__all__ = [
    # Report access
    "ReportFile",
    "ContentReader",
    "ReadResult",
    # JSON output
    "JsonWriter",
    "JsonWriteOptions",
]
