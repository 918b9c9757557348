from __future__ import annotations

import pytest

from app.db.models.answer_options import AnswerOption
from app.db.models.questions import Question
from app.quiz.answers.service import submit_answer
from app.quiz.errors import (
    AnswerOptionNotFoundError,
    QuestionNotFoundError,
    QuizValidationError,
    UserNotFoundError,
)
from app.quiz.performance.service import PerformanceService
from tests.quiz_fixtures import (
    MULTIPLE_CHOICE,
    NOW_UTC,
    _answer,
    _answer_all,
    _count_attempts,
    _create_badge,
    _create_category,
    _create_question,
    _create_questions,
    _create_user,
    _load_performance,
    _load_progress,
    _load_user,
)


@pytest.mark.asyncio
async def test_first_correct_answer_for_ava_updates_progress_points_and_streak(session_factory) -> None:
    category_id = await _create_category(session_factory)
    questions = await _create_questions(session_factory, category_id=category_id, total=5, points=15)
    user_id = await _create_user(session_factory, "Ava")

    result = await _answer(session_factory, user_id=user_id, question=questions[0], correct=True)

    assert result.is_correct is True
    assert result.points_earned == 15
    assert result.correct_answer == "Tell a grown-up"
    assert result.explanation == "Always ask a trusted adult."
    assert result.new_badges == ()

    progress = await _load_progress(session_factory, user_id=user_id, category_id=category_id)
    assert progress is not None
    assert (
        progress.questions_answered,
        progress.correct_answers,
        progress.points_earned,
        progress.is_completed,
    ) == (1, 1, 15, False)
    assert progress.last_question_id == questions[0].question_id

    user = await _load_user(session_factory, user_id)
    assert user.total_points == 15
    assert user.current_streak == 1
    assert user.best_streak == 1


@pytest.mark.asyncio
async def test_category_badge_is_awarded_on_the_completing_answer_only(session_factory) -> None:
    category_id = await _create_category(session_factory)
    questions = await _create_questions(session_factory, category_id=category_id, total=5, points=15)
    badge_id = await _create_badge(
        session_factory,
        name="Phone Guardian",
        requirement_type="category_complete",
        requirement_value=1,
        category_id=category_id,
    )
    user_id = await _create_user(session_factory, "Ava")

    results = await _answer_all(session_factory, user_id=user_id, questions=questions)

    assert [result.new_badges for result in results[:4]] == [(), (), (), ()]
    assert [badge.id for badge in results[4].new_badges] == [badge_id]
    assert results[4].applied.progress.is_completed is True
    assert [result.applied.progress.is_completed for result in results[:4]] == [False] * 4

    progress = await _load_progress(session_factory, user_id=user_id, category_id=category_id)
    assert progress is not None
    assert progress.questions_answered == 5
    assert progress.is_completed is True

    user = await _load_user(session_factory, user_id)
    assert user.total_points == 75
    assert user.current_streak == 5
    assert user.best_streak == 5


@pytest.mark.asyncio
async def test_wrong_answer_resets_streak_and_reports_correct_option(session_factory) -> None:
    category_id = await _create_category(session_factory)
    first, second = await _create_questions(session_factory, category_id=category_id, total=2)
    user_id = await _create_user(session_factory)

    await _answer(session_factory, user_id=user_id, question=first, correct=True)
    result = await _answer(session_factory, user_id=user_id, question=second, correct=False, at_offset_seconds=5)

    assert result.is_correct is False
    assert result.points_earned == 0
    assert result.correct_answer == "Tell a grown-up"

    user = await _load_user(session_factory, user_id)
    assert (user.total_points, user.current_streak, user.best_streak) == (15, 0, 1)

    progress = await _load_progress(session_factory, user_id=user_id, category_id=category_id)
    assert progress is not None
    assert (progress.questions_answered, progress.correct_answers, progress.points_earned) == (2, 1, 15)


@pytest.mark.asyncio
async def test_answer_updates_question_type_performance(session_factory) -> None:
    category_id = await _create_category(session_factory)
    questions = await _create_questions(session_factory, category_id=category_id, total=3)
    user_id = await _create_user(session_factory)

    await _answer(session_factory, user_id=user_id, question=questions[0], correct=True, time_taken=4)
    await _answer(session_factory, user_id=user_id, question=questions[1], correct=False, time_taken=10)
    await _answer(session_factory, user_id=user_id, question=questions[2], correct=True, time_taken=7)

    performance = await _load_performance(session_factory, user_id=user_id)
    row = performance[MULTIPLE_CHOICE]
    assert row.total_attempts == 3
    assert row.correct_attempts == 2
    assert row.success_rate == pytest.approx(66.67)
    assert row.avg_time_taken == pytest.approx(7.0)


@pytest.mark.asyncio
async def test_failure_before_performance_upsert_leaves_no_partial_effect(session_factory, monkeypatch) -> None:
    category_id = await _create_category(session_factory)
    question = await _create_question(session_factory, category_id=category_id)
    user_id = await _create_user(session_factory)

    async def _boom(*args, **kwargs):
        raise RuntimeError("performance store went away")

    monkeypatch.setattr(PerformanceService, "record_attempt", staticmethod(_boom))

    with pytest.raises(RuntimeError, match="performance store went away"):
        await _answer(session_factory, user_id=user_id, question=question, correct=True)

    assert await _count_attempts(session_factory) == 0
    assert await _load_progress(session_factory, user_id=user_id, category_id=category_id) is None
    assert await _load_performance(session_factory, user_id=user_id) == {}
    user = await _load_user(session_factory, user_id)
    assert (user.total_points, user.current_streak, user.best_streak) == (0, 0, 0)


@pytest.mark.asyncio
async def test_negative_time_taken_is_rejected(session_factory) -> None:
    category_id = await _create_category(session_factory)
    question = await _create_question(session_factory, category_id=category_id)
    user_id = await _create_user(session_factory)

    with pytest.raises(QuizValidationError):
        await _answer(session_factory, user_id=user_id, question=question, time_taken=-1)

    assert await _count_attempts(session_factory) == 0


@pytest.mark.asyncio
async def test_unknown_question_option_or_user_is_reported_as_not_found(session_factory) -> None:
    category_id = await _create_category(session_factory)
    first, second = await _create_questions(session_factory, category_id=category_id, total=2)
    user_id = await _create_user(session_factory)

    async def _submit(**overrides):
        payload = {
            "user_id": user_id,
            "question_id": first.question_id,
            "selected_option_id": first.correct_option_id,
            "time_taken": 3,
            "hint_used": False,
            "now_utc": NOW_UTC,
        }
        payload.update(overrides)
        async with session_factory.begin() as session:
            return await submit_answer(session, **payload)

    with pytest.raises(QuestionNotFoundError):
        await _submit(question_id=9_999)
    with pytest.raises(AnswerOptionNotFoundError):
        await _submit(selected_option_id=second.correct_option_id)
    with pytest.raises(AnswerOptionNotFoundError):
        await _submit(selected_option_id=9_999)
    with pytest.raises(UserNotFoundError):
        await _submit(user_id=user_id + 500)

    assert await _count_attempts(session_factory) == 0


async def _create_question_with_flags(session_factory, *, category_id: int, flags: tuple[bool, ...]) -> list[int]:
    async with session_factory.begin() as session:
        question = Question(
            category_id=category_id,
            question_type_id=MULTIPLE_CHOICE,
            question_text="Which of these are safe?",
            points=10,
            difficulty_level="easy",
            is_active=True,
        )
        session.add(question)
        await session.flush()
        options = [
            AnswerOption(
                question_id=question.id,
                option_text=f"Option {position}",
                icon="",
                is_correct=flag,
                order_position=position,
            )
            for position, flag in enumerate(flags, start=1)
        ]
        session.add_all(options)
        await session.flush()
        return [question.id, *(option.id for option in options)]


@pytest.mark.asyncio
async def test_question_with_several_correct_options_reports_first_by_position(session_factory) -> None:
    category_id = await _create_category(session_factory)
    question_id, first_option, second_option, third_option = await _create_question_with_flags(
        session_factory,
        category_id=category_id,
        flags=(False, True, True),
    )
    user_id = await _create_user(session_factory)

    async with session_factory.begin() as session:
        result = await submit_answer(
            session,
            user_id=user_id,
            question_id=question_id,
            selected_option_id=third_option,
            time_taken=2,
            hint_used=True,
            now_utc=NOW_UTC,
        )

    assert result.is_correct is True
    assert result.points_earned == 10
    assert result.correct_answer == "Option 2"


@pytest.mark.asyncio
async def test_question_without_correct_option_scores_zero_with_empty_answer(session_factory) -> None:
    category_id = await _create_category(session_factory)
    question_id, first_option, _second_option = await _create_question_with_flags(
        session_factory,
        category_id=category_id,
        flags=(False, False),
    )
    user_id = await _create_user(session_factory)

    async with session_factory.begin() as session:
        result = await submit_answer(
            session,
            user_id=user_id,
            question_id=question_id,
            selected_option_id=first_option,
            time_taken=2,
            hint_used=False,
            now_utc=NOW_UTC,
        )

    assert result.is_correct is False
    assert result.points_earned == 0
    assert result.correct_answer == ""
