from __future__ import annotations

from dataclasses import replace

from app.quiz.streak.types import ScoreSnapshot


def apply_answer(snapshot: ScoreSnapshot, *, is_correct: bool, points_earned: int) -> ScoreSnapshot:
    if not is_correct:
        return replace(snapshot, current_streak=0)

    current_streak = snapshot.current_streak + 1
    return ScoreSnapshot(
        total_points=snapshot.total_points + points_earned,
        current_streak=current_streak,
        best_streak=max(snapshot.best_streak, current_streak),
    )


def is_completed(*, questions_answered: int, total_questions: int, already_completed: bool) -> bool:
    # Completion latches; only a category reset clears it.
    return already_completed or questions_answered >= total_questions
