"""
Dependency maintenance metrics and their aggregation over modules.
"""

import re
from collections.abc import Iterable
from typing import Optional

from ..models.analysis import Analysis
from ..models.result import Metrics
from ..utils.logging import LoggerMixin
from .rating import MissedCountRating, RatingStrategy, get_rating_strategy, ratio

# group:artifact:version:updates:upgrades
DATA_STRING_RE = re.compile(r"[^:]*:[^:]*:[^:]*:(\d+):(\d+)")


def _missed(data: Iterable[str], group: int) -> int:
    total = 0
    for value in data:
        match = DATA_STRING_RE.fullmatch(value)
        if match:
            total += int(match.group(group))
    return total


def _union(lists: Iterable[list[str]]) -> list[str]:
    return list(dict.fromkeys(value for values in lists for value in values if value))


class MetricsCalculator(LoggerMixin):
    """
    Calculates the metrics of an analysis.

    Patch and upgrade ratings use the configured rating scheme (the
    percentage of affected dependencies by default); the ``*_missed_rating``
    values rate the absolute number of releases not applied.
    """

    def __init__(
        self,
        strategy: Optional[RatingStrategy] = None,
        missed_strategy: Optional[RatingStrategy] = None,
    ):
        self.strategy = strategy or get_rating_strategy("ratio")
        self.missed_strategy = missed_strategy or MissedCountRating()

    @classmethod
    def for_scheme(cls, rating_scheme: str) -> "MetricsCalculator":
        return cls(strategy=get_rating_strategy(rating_scheme))

    def calculate(self, analysis: Analysis) -> Metrics:
        """Calculate the metrics of one finalized analysis."""
        dependencies = analysis.all()
        metrics = self._build(
            dependencies_data=[d.to_data_string() for d in dependencies],
            patches_data=[d.to_data_string() for d in analysis.with_patches],
            patches_missed=analysis.patches_missed,
            upgrades_data=[d.to_data_string() for d in analysis.with_upgrades],
            upgrades_missed=analysis.upgrades_missed,
        )
        self.log_debug(
            "Metrics calculated",
            dependencies=metrics.dependencies,
            patches=metrics.patches,
            upgrades=metrics.upgrades,
        )
        return metrics

    def aggregate(self, children: Iterable[Metrics]) -> Metrics:
        """
        Combine the metrics of several modules.

        Dependencies shared by modules are counted once: the data strings of
        all children are unioned and every measure is recomputed from them.
        """
        children = list(children)
        patches_data = _union(child.patches_data for child in children)
        upgrades_data = _union(child.upgrades_data for child in children)
        metrics = self._build(
            dependencies_data=_union(child.dependencies_data for child in children),
            patches_data=patches_data,
            patches_missed=_missed(patches_data, 1),
            upgrades_data=upgrades_data,
            upgrades_missed=_missed(upgrades_data, 2),
        )
        self.log_debug(
            "Metrics aggregated", modules=len(children), dependencies=metrics.dependencies
        )
        return metrics

    def _build(
        self,
        dependencies_data: list[str],
        patches_data: list[str],
        patches_missed: int,
        upgrades_data: list[str],
        upgrades_missed: int,
    ) -> Metrics:
        total = len(dependencies_data)
        patches = len(patches_data)
        upgrades = len(upgrades_data)
        return Metrics(
            dependencies=total,
            dependencies_data=dependencies_data,
            patches=patches,
            patches_data=patches_data,
            patches_ratio=ratio(patches, total),
            patches_missed=patches_missed,
            patches_rating=self.strategy.rate(patches, total),
            patches_missed_rating=self.missed_strategy.rate(patches_missed, total),
            upgrades=upgrades,
            upgrades_data=upgrades_data,
            upgrades_ratio=ratio(upgrades, total),
            upgrades_missed=upgrades_missed,
            upgrades_rating=self.strategy.rate(upgrades, total),
            upgrades_missed_rating=self.missed_strategy.rate(upgrades_missed, total),
            rating_scheme=self.strategy.name,
        )
