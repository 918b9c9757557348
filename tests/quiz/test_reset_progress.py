from __future__ import annotations

import pytest

from app.db.repo.progress_repo import ProgressRepo
from app.quiz.errors import CategoryNotFoundError, UserNotFoundError
from app.quiz.performance.service import PerformanceService
from app.quiz.reset import reset_category_progress
from app.quiz.selection.service import QuestionSelector
from tests.quiz_fixtures import (
    MULTIPLE_CHOICE,
    NOW_UTC,
    TRUE_FALSE,
    _answer,
    _answer_all,
    _count_attempts,
    _count_user_badges,
    _create_badge,
    _create_category,
    _create_questions,
    _create_user,
    _load_performance,
    _load_progress,
    _load_user,
)


async def _reset(session_factory, *, user_id: int, category_id: int):
    async with session_factory.begin() as session:
        return await reset_category_progress(
            session,
            user_id=user_id,
            category_id=category_id,
            now_utc=NOW_UTC,
        )


@pytest.mark.asyncio
async def test_reset_removes_category_attempts_and_recomputes_points(session_factory) -> None:
    phone_id = await _create_category(session_factory)
    password_id = await _create_category(session_factory, name="Passwords", icon="🔐")
    phone_questions = await _create_questions(session_factory, category_id=phone_id, total=2, points=15)
    password_questions = await _create_questions(
        session_factory,
        category_id=password_id,
        total=2,
        points=10,
        question_type_id=TRUE_FALSE,
    )
    await _create_badge(session_factory, name="First Steps", requirement_type="questions_answered", requirement_value=1)
    user_id = await _create_user(session_factory)

    await _answer_all(session_factory, user_id=user_id, questions=phone_questions)
    await _answer(session_factory, user_id=user_id, question=password_questions[0], at_offset_seconds=10)

    result = await _reset(session_factory, user_id=user_id, category_id=phone_id)

    assert result.attempts_removed == 2
    assert result.total_points == 10
    assert await _count_attempts(session_factory) == 1
    assert await _load_progress(session_factory, user_id=user_id, category_id=phone_id) is None
    assert await _load_progress(session_factory, user_id=user_id, category_id=password_id) is not None

    user = await _load_user(session_factory, user_id)
    assert user.total_points == 10
    assert user.current_streak == 3
    assert user.best_streak == 3
    assert await _count_user_badges(session_factory) == 1

    performance = await _load_performance(session_factory, user_id=user_id)
    assert performance[MULTIPLE_CHOICE].total_attempts == 0
    assert performance[MULTIPLE_CHOICE].success_rate == 0.0
    assert performance[TRUE_FALSE].total_attempts == 1


@pytest.mark.asyncio
async def test_reset_makes_category_questions_servable_again(session_factory) -> None:
    category_id = await _create_category(session_factory)
    questions = await _create_questions(session_factory, category_id=category_id, total=1)
    user_id = await _create_user(session_factory)
    await _answer_all(session_factory, user_id=user_id, questions=questions)

    async with session_factory.begin() as session:
        assert await QuestionSelector.next_question_for_user(session, user_id=user_id, category_id=category_id) is None

    await _reset(session_factory, user_id=user_id, category_id=category_id)

    async with session_factory.begin() as session:
        question = await QuestionSelector.next_question_for_user(session, user_id=user_id, category_id=category_id)
    assert question is not None
    assert question.id == questions[0].question_id


@pytest.mark.asyncio
async def test_reset_of_untouched_category_is_a_no_op(session_factory) -> None:
    category_id = await _create_category(session_factory)
    user_id = await _create_user(session_factory)

    result = await _reset(session_factory, user_id=user_id, category_id=category_id)

    assert result.attempts_removed == 0
    assert result.total_points == 0


@pytest.mark.asyncio
async def test_reset_rejects_unknown_user_and_category(session_factory) -> None:
    category_id = await _create_category(session_factory)
    user_id = await _create_user(session_factory)

    with pytest.raises(UserNotFoundError):
        await _reset(session_factory, user_id=user_id + 1, category_id=category_id)
    with pytest.raises(CategoryNotFoundError):
        await _reset(session_factory, user_id=user_id, category_id=category_id + 1)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("owner", "method_name"),
    [
        (PerformanceService, "remove_attempts"),
        (ProgressRepo, "delete"),
    ],
)
async def test_failure_during_reset_leaves_category_untouched(
    session_factory,
    monkeypatch,
    owner,
    method_name: str,
) -> None:
    category_id = await _create_category(session_factory)
    questions = await _create_questions(session_factory, category_id=category_id, total=2, points=15)
    user_id = await _create_user(session_factory)
    await _answer_all(session_factory, user_id=user_id, questions=questions)

    async def _boom(*args, **kwargs):
        raise RuntimeError("reset store went away")

    monkeypatch.setattr(owner, method_name, staticmethod(_boom))

    with pytest.raises(RuntimeError, match="reset store went away"):
        await _reset(session_factory, user_id=user_id, category_id=category_id)

    assert await _count_attempts(session_factory) == 2

    progress = await _load_progress(session_factory, user_id=user_id, category_id=category_id)
    assert progress is not None
    assert (progress.questions_answered, progress.correct_answers, progress.points_earned) == (2, 2, 30)
    assert progress.is_completed is True

    performance = await _load_performance(session_factory, user_id=user_id)
    assert performance[MULTIPLE_CHOICE].total_attempts == 2
    assert performance[MULTIPLE_CHOICE].correct_attempts == 2

    user = await _load_user(session_factory, user_id)
    assert (user.total_points, user.current_streak, user.best_streak) == (30, 2, 2)
