from __future__ import annotations

from collections.abc import Iterable

from app.quiz.constants import STRUGGLING_MIN_ATTEMPTS, STRUGGLING_SUCCESS_RATE_THRESHOLD
from app.quiz.performance.types import PerformanceSnapshot, TypeStat


def success_rate(*, correct_attempts: int, total_attempts: int) -> float:
    if total_attempts <= 0:
        return 0.0
    return round(correct_attempts / total_attempts * 100, 2)


def record_attempt(
    snapshot: PerformanceSnapshot,
    *,
    is_correct: bool,
    time_taken: int,
) -> PerformanceSnapshot:
    """Folds one attempt into the running counters; the mean is incremental."""
    total_attempts = snapshot.total_attempts + 1
    correct_attempts = snapshot.correct_attempts + (1 if is_correct else 0)
    avg_time_taken = (snapshot.avg_time_taken * snapshot.total_attempts + time_taken) / total_attempts
    return PerformanceSnapshot(
        total_attempts=total_attempts,
        correct_attempts=correct_attempts,
        success_rate=success_rate(correct_attempts=correct_attempts, total_attempts=total_attempts),
        avg_time_taken=avg_time_taken,
    )


def remove_attempts(
    snapshot: PerformanceSnapshot,
    *,
    attempts: int,
    correct: int,
    time_taken_total: int,
) -> PerformanceSnapshot:
    total_attempts = max(0, snapshot.total_attempts - attempts)
    correct_attempts = min(total_attempts, max(0, snapshot.correct_attempts - correct))
    if total_attempts == 0:
        avg_time_taken = 0.0
    else:
        remaining_time = snapshot.avg_time_taken * snapshot.total_attempts - time_taken_total
        avg_time_taken = max(0.0, remaining_time) / total_attempts
    return PerformanceSnapshot(
        total_attempts=total_attempts,
        correct_attempts=correct_attempts,
        success_rate=success_rate(correct_attempts=correct_attempts, total_attempts=total_attempts),
        avg_time_taken=avg_time_taken,
    )


def order_by_weakness(stats: Iterable[TypeStat]) -> list[TypeStat]:
    # Untried types carry rate 0 and 0 attempts, so they lead among ties.
    return sorted(
        stats,
        key=lambda stat: (stat.success_rate, stat.total_attempts, stat.question_type_id),
    )


def is_struggling(stat: TypeStat) -> bool:
    return (
        stat.success_rate < STRUGGLING_SUCCESS_RATE_THRESHOLD
        and stat.total_attempts >= STRUGGLING_MIN_ATTEMPTS
    )


def find_struggling_type(stats: Iterable[TypeStat]) -> TypeStat | None:
    for stat in stats:
        if is_struggling(stat):
            return stat
    return None
