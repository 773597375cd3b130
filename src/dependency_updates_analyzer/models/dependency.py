"""
Dependency models and version tier helpers.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class Availability(str, Enum):
    """How far behind the newest release a dependency is."""

    INCREMENTAL = "incremental available"
    MINOR = "minor available"
    MAJOR = "major available"
    NONE = "no new available"

    @classmethod
    def from_status(cls, status: str) -> Optional["Availability"]:
        """Map a report status literal to an Availability, or None if unknown."""
        try:
            return cls(status)
        except ValueError:
            return None


def next_available(
    incrementals: list[str], minors: list[str], majors: list[str]
) -> tuple[Optional[str], Availability]:
    """Return the first version of the lowest non-empty tier and its tier."""
    if incrementals:
        return incrementals[0], Availability.INCREMENTAL
    if minors:
        return minors[0], Availability.MINOR
    if majors:
        return majors[0], Availability.MAJOR
    return None, Availability.NONE


def last_available(
    current: str, incrementals: list[str], minors: list[str], majors: list[str]
) -> str:
    """Return the last version of the highest non-empty tier, else ``current``."""
    for tier in (majors, minors, incrementals):
        if tier:
            return tier[-1]
    return current


class Dependency(BaseModel):
    """A dependency from the report with its available newer versions."""

    group_id: str = Field(..., description="Maven groupId")
    artifact_id: str = Field(..., description="Maven artifactId")
    version: str = Field(..., description="Version currently in use")
    scope: Optional[str] = Field(None, description="Dependency scope")
    classifier: Optional[str] = Field(None, description="Artifact classifier")
    type: str = Field(default="jar", description="Artifact type")
    next: Optional[str] = Field(None, description="Next available version")
    last: Optional[str] = Field(None, description="Latest available version")
    availability: Availability = Field(
        default=Availability.NONE, description="Tier of the next available version"
    )
    incrementals: list[str] = Field(
        default_factory=list, description="Available incremental (patch) versions"
    )
    minors: list[str] = Field(
        default_factory=list, description="Available minor versions"
    )
    majors: list[str] = Field(
        default_factory=list, description="Available major versions"
    )

    @model_validator(mode="after")
    def fill_last(self):
        """Default ``last`` to the newest tier version or the current version."""
        if self.last is None:
            self.last = last_available(
                self.version, self.incrementals, self.minors, self.majors
            )
        return self

    @property
    def update_count(self) -> int:
        """Number of patch releases available."""
        return len(self.incrementals)

    @property
    def upgrade_count(self) -> int:
        """Number of minor and major releases available."""
        return len(self.minors) + len(self.majors)

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def to_data_string(self) -> str:
        """Serialise to ``group:artifact:version:updates:upgrades``."""
        return f"{self.coordinates}:{self.update_count}:{self.upgrade_count}"

    def __str__(self) -> str:
        return self.coordinates
