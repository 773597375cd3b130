"""Tests for the rating strategies."""

import pytest

from dependency_updates_analyzer.core.rating import (
    TIERED_RATINGS,
    MissedCountRating,
    Rating,
    RatioRating,
    TieredRating,
    get_rating_strategy,
    ratio,
)


@pytest.mark.parametrize(
    ("count", "total", "expected"),
    [
        (0, 100, Rating.A),
        (4, 100, Rating.A),
        (5, 100, Rating.B),
        (9, 100, Rating.B),
        (10, 100, Rating.C),
        (19, 100, Rating.C),
        (20, 100, Rating.D),
        (49, 100, Rating.D),
        (50, 100, Rating.E),
        (51, 100, Rating.E),
        (0, 0, Rating.A),
        (1, 3, Rating.D),
    ],
)
def test_ratio_rating(count: int, total: int, expected: Rating) -> None:
    assert RatioRating().rate(count, total) is expected


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (0, Rating.A),
        (2, Rating.A),
        (3, Rating.B),
        (4, Rating.B),
        (5, Rating.C),
        (6, Rating.C),
        (7, Rating.D),
        (8, Rating.D),
        (9, Rating.E),
        (1000, Rating.E),
    ],
)
def test_missed_count_rating(count: int, expected: Rating) -> None:
    assert MissedCountRating().rate(count) is expected


@pytest.mark.parametrize(
    ("count", "total", "expected"),
    [
        (0, 0, Rating.A),
        (1, 10, Rating.B),
        (2, 10, Rating.C),
        (5, 10, Rating.D),
        (6, 10, Rating.E),
        (1, 20, Rating.A),
        (3, 20, Rating.B),
        (11, 20, Rating.E),
        (2, 50, Rating.A),
        (25, 50, Rating.D),
        (26, 50, Rating.E),
        (5, 200, Rating.A),
        (20, 200, Rating.C),
        (51, 200, Rating.E),
    ],
)
def test_tiered_rating(count: int, total: int, expected: Rating) -> None:
    assert TieredRating().rate(count, total) is expected


def test_tiered_rating_beyond_table_is_worst() -> None:
    assert TieredRating().rate(15, 10) is Rating.E


def test_negative_counts_are_rejected() -> None:
    with pytest.raises(ValueError):
        RatioRating().rate(-1, 10)
    with pytest.raises(ValueError):
        MissedCountRating().rate(-1)


def test_ratio() -> None:
    assert ratio(1, 4) == 25.0
    assert ratio(3, 0) == 0.0


def test_rating_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        TIERED_RATINGS[range(0, 1)] = {}


def test_ratings_are_ordinal() -> None:
    assert Rating.A < Rating.E
    assert int(Rating.C) == 3
    assert Rating.D.letter == "D"


@pytest.mark.parametrize(
    ("name", "strategy_type"),
    [("ratio", RatioRating), ("tiered", TieredRating), (" Tiered ", TieredRating)],
)
def test_get_rating_strategy(name: str, strategy_type) -> None:
    assert isinstance(get_rating_strategy(name), strategy_type)


def test_unknown_rating_strategy() -> None:
    with pytest.raises(ValueError, match="Unknown rating scheme"):
        get_rating_strategy("median")


def test_rating_is_idempotent() -> None:
    strategy = RatioRating()
    assert [strategy.rate(7, 30) for _ in range(3)] == [Rating.D] * 3
