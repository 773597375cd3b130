"""
Result models for an analysis run: issues, metrics and the combined result.
"""

from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .dependency import Dependency
from .severity import SeverityLevel, SeverityStats


class Rating(IntEnum):
    """Maintenance rating; lower is better."""

    A = 1
    B = 2
    C = 3
    D = 4
    E = 5

    @property
    def letter(self) -> str:
        return self.name


class Issue(BaseModel):
    """An outdated dependency reported at a severity."""

    dependency: Dependency = Field(..., description="Outdated dependency")
    severity: SeverityLevel = Field(..., description="Resolved issue severity")
    message: str = Field(..., description="Human readable description")
    dependency_management: bool = Field(
        default=False, description="Declared in dependency management"
    )

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.message}"


class Metrics(BaseModel):
    """
    Dependency maintenance measures of one module, or of several aggregated.

    The ``*_data`` lists hold ``group:artifact:version:updates:upgrades``
    strings; aggregation unions them and recomputes everything else.
    """

    dependencies: int = Field(default=0, ge=0, description="Total dependencies")
    dependencies_data: list[str] = Field(default_factory=list)
    patches: int = Field(default=0, ge=0, description="Dependencies with patches")
    patches_data: list[str] = Field(default_factory=list)
    patches_ratio: float = Field(default=0.0, ge=0.0, le=100.0)
    patches_missed: int = Field(default=0, ge=0, description="Patches not applied")
    patches_rating: Rating = Field(default=Rating.A)
    patches_missed_rating: Rating = Field(default=Rating.A)
    upgrades: int = Field(default=0, ge=0, description="Dependencies with upgrades")
    upgrades_data: list[str] = Field(default_factory=list)
    upgrades_ratio: float = Field(default=0.0, ge=0.0, le=100.0)
    upgrades_missed: int = Field(default=0, ge=0, description="Upgrades not applied")
    upgrades_rating: Rating = Field(default=Rating.A)
    upgrades_missed_rating: Rating = Field(default=Rating.A)
    rating_scheme: str = Field(default="ratio", description="Scheme used for ratings")


class AnalysisResult(BaseModel):
    """Everything produced by analyzing one report."""

    report_path: Optional[str] = Field(None, description="Analyzed report")
    issues: list[Issue] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
    severity_stats: SeverityStats = Field(default_factory=SeverityStats)
    availability_counts: dict[str, int] = Field(
        default_factory=dict, description="Dependencies per availability tier"
    )
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @computed_field
    @property
    def highest_severity(self) -> Optional[SeverityLevel]:
        return self.severity_stats.get_highest_severity()

    def issues_at_least(self, severity: SeverityLevel) -> list[Issue]:
        """Return issues at ``severity`` or worse."""
        return [issue for issue in self.issues if issue.severity >= severity]
