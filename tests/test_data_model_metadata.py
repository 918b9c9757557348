from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from app.db.models import Base


def _constraint_names(table_name: str, kind: type) -> set[str]:
    table = Base.metadata.tables[table_name]
    return {constraint.name for constraint in table.constraints if isinstance(constraint, kind)}


def test_all_quiz_tables_registered() -> None:
    assert set(Base.metadata.tables) == {
        "users",
        "categories",
        "question_types",
        "questions",
        "answer_options",
        "badges",
        "user_badges",
        "question_attempts",
        "user_progress",
        "user_question_type_performance",
    }


def test_aggregate_tables_have_one_row_per_key() -> None:
    assert "uq_users_name" in _constraint_names("users", UniqueConstraint)
    assert "uq_user_progress_user_category" in _constraint_names("user_progress", UniqueConstraint)
    assert "uq_user_question_type_performance_user_type" in _constraint_names(
        "user_question_type_performance",
        UniqueConstraint,
    )
    assert "uq_user_badges_user_badge" in _constraint_names("user_badges", UniqueConstraint)


def test_counters_and_badge_types_are_checked() -> None:
    assert {
        "ck_users_total_points_non_negative",
        "ck_users_current_streak_non_negative",
        "ck_users_best_streak_high_water",
    } <= _constraint_names("users", CheckConstraint)
    assert "ck_badges_requirement_type" in _constraint_names("badges", CheckConstraint)
    assert "ck_user_progress_correct_range" in _constraint_names("user_progress", CheckConstraint)
