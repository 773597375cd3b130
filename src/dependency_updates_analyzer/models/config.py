"""
Configuration models for the dependency updates analyzer.
"""

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..utils.exceptions import ConfigurationError
from .severity import SeverityLevel

DEFAULT_REPORT_PATH = Path("target/dependency-updates-report.xml")

# alpha, beta, milestone, release candidate, early access, preview and snapshot
DEFAULT_VERSION_EXCLUSION_REGEX = (
    r".*[-_.]"
    r"(alpha|Alpha|ALPHA|a|beta|Beta|BETA|b|M|m|milestone|rc|RC|cr|CR|"
    r"ea|EA|preview|Preview|PREVIEW|SNAPSHOT|snapshot)"
    r"[-_.]?[0-9]*(-.*)?"
)

PROPERTY_PREFIX = "sonar."

# Flat property keys understood by AnalysisConfig.from_properties
PROPERTY_KEYS = {
    "dependencyUpdates.reportPath": ("report_path",),
    "dependencyUpdates.updateIncremental": ("severities", "incremental"),
    "dependencyUpdates.updateMinor": ("severities", "minor"),
    "dependencyUpdates.updateMajor": ("severities", "major"),
    "dependencyUpdates.inclusions": ("filters", "inclusions"),
    "dependencyUpdates.exclusions": ("filters", "exclusions"),
    "dependencyUpdates.override.info": ("filters", "override_info"),
    "dependencyUpdates.override.minor": ("filters", "override_minor"),
    "dependencyUpdates.override.major": ("filters", "override_major"),
    "dependencyUpdates.override.critical": ("filters", "override_critical"),
    "dependencyUpdates.override.blocker": ("filters", "override_blocker"),
    "dependencyUpdates.versionExclusionRegex": ("versions", "exclusion_regex"),
    "dependencyUpdates.discreteMinorMajor": ("versions", "discrete_minor_major"),
    "dependencyUpdates.ratingScheme": ("rating_scheme",),
}


class VersionConfig(BaseModel):
    """Configuration for version filtering while parsing the report."""

    exclusion_regex: str = Field(
        default=DEFAULT_VERSION_EXCLUSION_REGEX,
        description="Versions fully matching this regex are ignored",
    )
    discrete_minor_major: bool = Field(
        default=True,
        description="Keep one version per major.minor (minors) and major (majors)",
    )

    @field_validator("exclusion_regex")
    @classmethod
    def validate_regex(cls, v):
        """Ensure the exclusion pattern is a valid regex."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid version exclusion regex: {e}") from e
        return v

    def compile_exclusion(self) -> re.Pattern:
        return re.compile(self.exclusion_regex)


class SeverityDefaults(BaseModel):
    """Severity used for each availability tier when no override applies."""

    incremental: SeverityLevel = Field(
        default=SeverityLevel.MINOR, description="Severity for incremental updates"
    )
    minor: SeverityLevel = Field(
        default=SeverityLevel.MAJOR, description="Severity for minor updates"
    )
    major: SeverityLevel = Field(
        default=SeverityLevel.CRITICAL, description="Severity for major updates"
    )

    @field_validator("incremental", "minor", "major", mode="before")
    @classmethod
    def parse_severity(cls, v):
        """Accept severity names in any case."""
        if isinstance(v, str):
            severity = SeverityLevel.from_string(v)
            if severity is None:
                raise ValueError(f"Unknown severity: {v}")
            return severity
        return v


class FilterConfig(BaseModel):
    """
    Artifact pattern lists controlling which dependencies raise issues.

    Each list is comma separated; a pattern has the form
    ``[groupId]:[artifactId]:[type]:[version]:[scope]:[classifier]`` where
    every segment is optional and supports ``*`` wildcards or, for the
    version, a range such as ``[1.0,2.0)``.
    """

    inclusions: str = Field(default=":::::", description="Dependencies to analyze")
    exclusions: str = Field(default="", description="Dependencies to skip")
    override_info: str = Field(default="", description="Always report as INFO")
    override_minor: str = Field(default="", description="Always report as MINOR")
    override_major: str = Field(default="", description="Always report as MAJOR")
    override_critical: str = Field(default="", description="Always report as CRITICAL")
    override_blocker: str = Field(default="", description="Always report as BLOCKER")

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """Treat missing lists as blank."""
        return "" if v is None else v


class AnalysisConfig(BaseModel):
    """Main configuration for an analysis run."""

    report_path: Path = Field(
        default=DEFAULT_REPORT_PATH, description="Dependency updates XML report"
    )
    versions: VersionConfig = Field(
        default_factory=VersionConfig, description="Version filtering"
    )
    severities: SeverityDefaults = Field(
        default_factory=SeverityDefaults, description="Default severities per tier"
    )
    filters: FilterConfig = Field(
        default_factory=FilterConfig, description="Inclusion, exclusion and overrides"
    )
    rating_scheme: Literal["ratio", "tiered"] = Field(
        default="ratio", description="Rating scheme for patch and upgrade ratings"
    )
    quiet: bool = Field(default=False, description="Suppress output messages")

    @field_validator("report_path", mode="before")
    @classmethod
    def convert_report_path(cls, v):
        """Convert string path to Path object."""
        return Path(v) if not isinstance(v, Path) else v

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "AnalysisConfig":
        """Create configuration from flat ``dependencyUpdates.*`` properties."""
        data: dict[str, Any] = {}
        for key, value in properties.items():
            if key.startswith(PROPERTY_PREFIX):
                key = key[len(PROPERTY_PREFIX) :]
            target = PROPERTY_KEYS.get(key)
            if target is None:
                continue
            section = data
            for part in target[:-1]:
                section = section.setdefault(part, {})
            section[target[-1]] = value
        return cls.load(data)

    @classmethod
    def from_file(cls, path: Path) -> "AnalysisConfig":
        """Load configuration from a JSON file."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {e}",
                config_field="path",
                config_value=path,
            ) from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file {path}: {e}",
                config_field="file",
                config_value=path,
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a JSON object",
                config_field="file",
                config_value=path,
            )
        return cls.load(data)

    @classmethod
    def load(cls, data: Mapping[str, Any]) -> "AnalysisConfig":
        """Validate a mapping, reporting problems as ConfigurationError."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            errors = e.errors()
            field = ".".join(str(p) for p in errors[0]["loc"]) if errors else None
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                config_field=field,
                config_value=errors[0].get("input") if errors else None,
            ) from e

    def validate_paths(self) -> list[str]:
        """Validate that the report path points to a readable file."""
        errors = []
        if not self.report_path.exists():
            errors.append(f"Report does not exist: {self.report_path}")
        elif not self.report_path.is_file():
            errors.append(f"Report path is not a file: {self.report_path}")
        return errors
