from __future__ import annotations

import pytest

from app.quiz.performance.rules import (
    find_struggling_type,
    is_struggling,
    order_by_weakness,
    record_attempt,
    remove_attempts,
    success_rate,
)
from app.quiz.performance.types import EMPTY_PERFORMANCE, PerformanceSnapshot, TypeStat


def _stat(type_id: int, rate: float, attempts: int, name: str = "multiple_choice") -> TypeStat:
    return TypeStat(
        question_type_id=type_id,
        type_name=name,
        difficulty_level="easy",
        success_rate=rate,
        total_attempts=attempts,
    )


def test_success_rate_is_zero_without_attempts() -> None:
    assert success_rate(correct_attempts=0, total_attempts=0) == 0.0


def test_success_rate_is_percentage_rounded_to_two_places() -> None:
    assert success_rate(correct_attempts=1, total_attempts=3) == 33.33
    assert success_rate(correct_attempts=2, total_attempts=3) == 66.67
    assert success_rate(correct_attempts=4, total_attempts=4) == 100.0


def test_record_attempt_starts_from_empty_snapshot() -> None:
    snapshot = record_attempt(EMPTY_PERFORMANCE, is_correct=True, time_taken=8)

    assert snapshot == PerformanceSnapshot(
        total_attempts=1,
        correct_attempts=1,
        success_rate=100.0,
        avg_time_taken=8.0,
    )


def test_record_attempt_keeps_running_mean_of_time_taken() -> None:
    snapshot = EMPTY_PERFORMANCE
    for is_correct, time_taken in ((True, 4), (False, 10), (True, 7)):
        snapshot = record_attempt(snapshot, is_correct=is_correct, time_taken=time_taken)

    assert snapshot.total_attempts == 3
    assert snapshot.correct_attempts == 2
    assert snapshot.success_rate == 66.67
    assert snapshot.avg_time_taken == pytest.approx(7.0)


def test_remove_attempts_subtracts_counts_and_time() -> None:
    snapshot = PerformanceSnapshot(total_attempts=4, correct_attempts=3, success_rate=75.0, avg_time_taken=5.0)

    reduced = remove_attempts(snapshot, attempts=2, correct=1, time_taken_total=4)

    assert reduced.total_attempts == 2
    assert reduced.correct_attempts == 2
    assert reduced.success_rate == 100.0
    assert reduced.avg_time_taken == pytest.approx(8.0)


def test_remove_attempts_clears_snapshot_when_everything_is_removed() -> None:
    snapshot = PerformanceSnapshot(total_attempts=2, correct_attempts=1, success_rate=50.0, avg_time_taken=3.0)

    assert remove_attempts(snapshot, attempts=2, correct=1, time_taken_total=6) == EMPTY_PERFORMANCE


def test_order_by_weakness_puts_lowest_rate_first_and_untried_types_ahead_of_ties() -> None:
    ordered = order_by_weakness(
        [
            _stat(1, 80.0, 5),
            _stat(2, 0.0, 2),
            _stat(3, 0.0, 0),
            _stat(4, 40.0, 5),
        ]
    )

    assert [stat.question_type_id for stat in ordered] == [3, 2, 4, 1]


@pytest.mark.parametrize(
    ("rate", "attempts", "expected"),
    [
        (59.99, 3, True),
        (60.0, 3, False),
        (10.0, 2, False),
        (0.0, 10, True),
    ],
)
def test_is_struggling_needs_low_rate_and_enough_attempts(rate: float, attempts: int, expected: bool) -> None:
    assert is_struggling(_stat(1, rate, attempts)) is expected


def test_find_struggling_type_returns_first_match_in_given_order() -> None:
    stats = [_stat(3, 0.0, 0), _stat(1, 33.33, 3), _stat(4, 50.0, 4)]

    struggling = find_struggling_type(stats)

    assert struggling is not None
    assert struggling.question_type_id == 1


def test_find_struggling_type_returns_none_when_everyone_does_fine() -> None:
    assert find_struggling_type([_stat(1, 75.0, 8), _stat(2, 20.0, 1)]) is None
