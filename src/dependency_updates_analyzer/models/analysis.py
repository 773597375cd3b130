"""
Aggregate of the dependencies parsed from one or more reports.
"""

from collections.abc import Iterable
from typing import Optional

from ..utils.exceptions import AnalysisStateError
from .dependency import Availability, Dependency


class Analysis:
    """
    Dependencies and dependency managements of a report.

    An analysis is filled by the report parser and finalized exactly once;
    finalization computes the availability counts and freezes both lists.
    """

    def __init__(
        self,
        dependencies: Optional[Iterable[Dependency]] = None,
        dependency_managements: Optional[Iterable[Dependency]] = None,
    ):
        self._dependencies: list[Dependency] = list(dependencies or [])
        self._dependency_managements: list[Dependency] = list(
            dependency_managements or []
        )
        self._finalized = False
        self.using_last_version = 0
        self.next_incremental_available = 0
        self.next_minor_available = 0
        self.next_major_available = 0

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def dependencies(self) -> tuple[Dependency, ...]:
        return tuple(self._dependencies)

    @property
    def dependency_managements(self) -> tuple[Dependency, ...]:
        return tuple(self._dependency_managements)

    def add_dependency(self, dependency: Dependency) -> None:
        self._check_open()
        self._dependencies.append(dependency)

    def add_dependency_management(self, dependency: Dependency) -> None:
        self._check_open()
        self._dependency_managements.append(dependency)

    def _check_open(self) -> None:
        if self._finalized:
            raise AnalysisStateError("Analysis is finalized and can no longer change")

    def finalize(self) -> "Analysis":
        """Compute the derived counts and make the analysis read-only."""
        self._check_open()
        counts = {availability: 0 for availability in Availability}
        for dependency in self.all():
            counts[dependency.availability] += 1
        self.using_last_version = counts[Availability.NONE]
        self.next_incremental_available = counts[Availability.INCREMENTAL]
        self.next_minor_available = counts[Availability.MINOR]
        self.next_major_available = counts[Availability.MAJOR]
        self._finalized = True
        return self

    def all(self) -> list[Dependency]:
        """Return dependencies followed by dependency managements."""
        return self._dependencies + self._dependency_managements

    @property
    def total(self) -> int:
        return len(self._dependencies) + len(self._dependency_managements)

    @property
    def with_patches(self) -> list[Dependency]:
        return [d for d in self.all() if d.update_count > 0]

    @property
    def with_upgrades(self) -> list[Dependency]:
        return [d for d in self.all() if d.upgrade_count > 0]

    @property
    def patches_missed(self) -> int:
        return sum(d.update_count for d in self.all())

    @property
    def upgrades_missed(self) -> int:
        return sum(d.upgrade_count for d in self.all())

    def __len__(self) -> int:
        return self.total

    def __repr__(self) -> str:
        return (
            f"Analysis(dependencies={len(self._dependencies)}, "
            f"dependency_managements={len(self._dependency_managements)}, "
            f"finalized={self._finalized})"
        )
