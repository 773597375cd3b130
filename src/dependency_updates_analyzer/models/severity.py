"""
Severity level models and validation.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SeverityLevel(str, Enum):
    """Enumeration of issue severities, from least to most severe."""

    INFO = "INFO"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"
    BLOCKER = "BLOCKER"

    @classmethod
    def from_string(cls, value: str) -> Optional["SeverityLevel"]:
        """Convert string to SeverityLevel, case-insensitive."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None

    @property
    def numeric_value(self) -> int:
        """Get numeric value for severity sorting (higher = more severe)."""
        return {
            SeverityLevel.BLOCKER: 4,
            SeverityLevel.CRITICAL: 3,
            SeverityLevel.MAJOR: 2,
            SeverityLevel.MINOR: 1,
            SeverityLevel.INFO: 0,
        }[self]

    def __lt__(self, other: "SeverityLevel") -> bool:
        """Enable sorting by severity level."""
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.numeric_value < other.numeric_value

    def __le__(self, other: "SeverityLevel") -> bool:
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.numeric_value <= other.numeric_value

    def __gt__(self, other: "SeverityLevel") -> bool:
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.numeric_value > other.numeric_value

    def __ge__(self, other: "SeverityLevel") -> bool:
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.numeric_value >= other.numeric_value


class SeverityStats(BaseModel):
    """Distribution of issue severities over one analysis."""

    total_issues: int = Field(default=0, ge=0, description="Total number of issues")
    severity_counts: dict[SeverityLevel, int] = Field(
        default_factory=dict, description="Count of issues per severity level"
    )

    @field_validator("severity_counts")
    @classmethod
    def validate_counts(cls, v):
        """Ensure all counts are non-negative."""
        for severity, count in v.items():
            if count < 0:
                raise ValueError(f"Count for {severity} cannot be negative")
        return v

    @property
    def severity_percentages(self) -> dict[SeverityLevel, float]:
        """Calculate percentage distribution of severities."""
        if self.total_issues == 0:
            return {}

        return {
            severity: (count / self.total_issues) * 100
            for severity, count in self.severity_counts.items()
        }

    def add_severity(self, severity: SeverityLevel) -> None:
        """Add a severity to the statistics."""
        self.severity_counts[severity] = self.severity_counts.get(severity, 0) + 1
        self.total_issues += 1

    def get_highest_severity(self) -> Optional[SeverityLevel]:
        """Get the most severe level that occurred."""
        if not self.severity_counts:
            return None
        return max(self.severity_counts)
