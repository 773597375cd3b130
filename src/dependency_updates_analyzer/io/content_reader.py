"""
Report reading with encoding detection.
"""

import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import chardet

from ..utils.exceptions import MalformedInputError, handle_report_error
from ..utils.logging import LoggerMixin

BOMS = (b"\xef\xbb\xbf", b"\xff\xfe", b"\xfe\xff")
_DECLARED_ENCODING_RE = re.compile(rb"^\s*<\?xml[^>]*\bencoding\s*=\s*[\"']([^\"']+)[\"']")


@dataclass
class ReadResult:
    """Result of reading a report."""

    content: bytes
    encoding: str
    file_size: int
    read_time_ms: float
    transcoded: bool = False


class ContentReader(LoggerMixin):
    """
    Reads report bytes for the XML parser.

    Reports declaring their encoding (or starting with a byte order mark) are
    passed through untouched. Undeclared reports that are not valid UTF-8 are
    decoded with the encoding detected by chardet and handed on as UTF-8.
    """

    def __init__(
        self,
        fallback_encoding: str = "utf-8",
        detect_encoding: bool = True,
        max_detection_bytes: int = 10000,
        min_confidence: float = 0.7,
    ):
        """Initialise content reader with configuration."""
        self.fallback_encoding = fallback_encoding
        self.detect_encoding = detect_encoding
        self.max_detection_bytes = max_detection_bytes
        self.min_confidence = min_confidence

    def read_report(self, file_path: Path) -> ReadResult:
        """Read a report, transcoding it to UTF-8 when needed."""
        start_time = time.perf_counter()
        try:
            raw = file_path.read_bytes()
        except OSError as e:
            raise handle_report_error(e, str(file_path)) from e

        content, encoding, transcoded = self._prepare(raw, file_path)
        read_time = (time.perf_counter() - start_time) * 1000

        self.log_debug(
            "Report read",
            file_path=str(file_path),
            encoding=encoding,
            size_bytes=len(raw),
            transcoded=transcoded,
            read_time_ms=round(read_time, 2),
        )
        return ReadResult(
            content=content,
            encoding=encoding,
            file_size=len(raw),
            read_time_ms=read_time,
            transcoded=transcoded,
        )

    def _prepare(self, raw: bytes, file_path: Path) -> tuple[bytes, str, bool]:
        if raw.startswith(BOMS):
            return raw, "bom", False

        declared = _DECLARED_ENCODING_RE.match(raw)
        if declared:
            return raw, declared.group(1).decode("ascii", "replace"), False

        try:
            raw.decode("utf-8")
            return raw, "utf-8", False
        except UnicodeDecodeError:
            pass

        encoding = self._detect_encoding(raw, file_path)
        try:
            text = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise MalformedInputError(
                f"Cannot decode report as {encoding}: {e}", str(file_path)
            ) from e
        return text.encode("utf-8"), encoding, True

    def _detect_encoding(self, raw: bytes, file_path: Path) -> str:
        """Detect report encoding using chardet."""
        if not self.detect_encoding:
            return self.fallback_encoding

        detection_result = chardet.detect(raw[: self.max_detection_bytes])
        detected_encoding = detection_result.get("encoding")
        confidence = detection_result.get("confidence") or 0.0

        if detected_encoding and confidence > self.min_confidence:
            self.log_debug(
                "Encoding detected",
                file_path=str(file_path),
                encoding=detected_encoding,
                confidence=confidence,
            )
            return detected_encoding

        self.log_warning(
            "Low confidence encoding detection, using fallback",
            file_path=str(file_path),
            detected=detected_encoding,
            confidence=confidence,
            fallback=self.fallback_encoding,
        )
        return self.fallback_encoding

    def get_reader_statistics(self) -> dict[str, Any]:
        """Get current reader configuration statistics."""
        return {
            "fallback_encoding": self.fallback_encoding,
            "detect_encoding": self.detect_encoding,
            "max_detection_bytes": self.max_detection_bytes,
            "min_confidence": self.min_confidence,
        }
