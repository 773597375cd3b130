"""
Ordinal ratings (A best, E worst) derived from counts and ratios.
"""

import sys
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Optional

from ..models.result import Rating


# Exclusive upper bounds of the dependency ratio (percent) per rating
RATIO_THRESHOLDS = MappingProxyType(
    {
        Rating.A: 5.0,
        Rating.B: 10.0,
        Rating.C: 20.0,
        Rating.D: 50.0,
    }
)

# Inclusive upper bounds of missed releases per rating
MISSED_COUNT_THRESHOLDS = MappingProxyType(
    {
        Rating.A: 2,
        Rating.B: 4,
        Rating.C: 6,
        Rating.D: 8,
    }
)

# total dependencies -> (dependencies needing an update -> rating)
TIERED_RATINGS = MappingProxyType(
    {
        range(0, 11): MappingProxyType(
            {
                range(0, 1): Rating.A,
                range(1, 2): Rating.B,
                range(2, 3): Rating.C,
                range(3, 6): Rating.D,
                range(6, 11): Rating.E,
            }
        ),
        range(11, 21): MappingProxyType(
            {
                range(0, 2): Rating.A,
                range(2, 4): Rating.B,
                range(4, 6): Rating.C,
                range(6, 11): Rating.D,
                range(11, 21): Rating.E,
            }
        ),
        range(21, 51): MappingProxyType(
            {
                range(0, 3): Rating.A,
                range(3, 6): Rating.B,
                range(6, 11): Rating.C,
                range(11, 26): Rating.D,
                range(26, 51): Rating.E,
            }
        ),
        range(51, sys.maxsize): MappingProxyType(
            {
                range(0, 6): Rating.A,
                range(6, 11): Rating.B,
                range(11, 21): Rating.C,
                range(21, 51): Rating.D,
                range(51, sys.maxsize): Rating.E,
            }
        ),
    }
)


def ratio(count: int, total: int) -> float:
    """Percentage of ``count`` in ``total``; 0 when there is nothing to count."""
    if total <= 0:
        return 0.0
    return 100.0 * count / total


def _check_counts(count: int, total: Optional[int] = None) -> None:
    if count < 0 or (total is not None and total < 0):
        raise ValueError(f"Counts must not be negative: count={count}, total={total}")


class RatingStrategy(ABC):
    """Maps a count out of a total onto a Rating."""

    name: str = ""

    @abstractmethod
    def rate(self, count: int, total: int) -> Rating:
        """Rate ``count`` out of ``total``."""
        pass


class RatioRating(RatingStrategy):
    """Rates the percentage of dependencies needing an update."""

    name = "ratio"

    def rate(self, count: int, total: int) -> Rating:
        _check_counts(count, total)
        value = ratio(count, total)
        for rating, threshold in RATIO_THRESHOLDS.items():
            if value < threshold:
                return rating
        return Rating.E


class MissedCountRating(RatingStrategy):
    """Rates an absolute number of missed releases; ``total`` is ignored."""

    name = "missed"

    def rate(self, count: int, total: int = 0) -> Rating:
        _check_counts(count)
        for rating, threshold in MISSED_COUNT_THRESHOLDS.items():
            if count <= threshold:
                return rating
        return Rating.E


class TieredRating(RatingStrategy):
    """Rates with a separate count table per project size."""

    name = "tiered"

    def rate(self, count: int, total: int) -> Rating:
        _check_counts(count, total)
        for totals, table in TIERED_RATINGS.items():
            if total in totals:
                for counts, rating in table.items():
                    if count in counts:
                        return rating
        # More dependencies needing an update than the table covers
        return Rating.E


_STRATEGIES = MappingProxyType(
    {
        RatioRating.name: RatioRating,
        TieredRating.name: TieredRating,
        MissedCountRating.name: MissedCountRating,
    }
)


def get_rating_strategy(name: str = "ratio") -> RatingStrategy:
    """Return the rating strategy registered under ``name``."""
    try:
        return _STRATEGIES[name.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown rating scheme: {name} (expected one of {', '.join(_STRATEGIES)})"
        ) from None
