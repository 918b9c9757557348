from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.answer_options import AnswerOption
from app.db.models.questions import Question
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.question_types_repo import QuestionTypesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.quiz.constants import DEFAULT_QUESTION_POINTS, DIFFICULTY_LEVELS
from app.quiz.errors import CategoryNotFoundError, QuestionTypeNotFoundError, QuizValidationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class OptionDraft:
    text: str
    is_correct: bool = False
    icon: str | None = None
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class QuestionDraft:
    category_id: int
    question_type_id: int
    question_text: str
    options: tuple[OptionDraft, ...]
    explanation: str | None = None
    hint_text: str | None = None
    image_url: str | None = None
    points: int = DEFAULT_QUESTION_POINTS
    difficulty_level: str = "easy"
    is_active: bool = True


def validate_draft(draft: QuestionDraft) -> None:
    if not draft.question_text.strip():
        raise QuizValidationError("questionText is required")
    if draft.points < 0:
        raise QuizValidationError("points must not be negative")
    if draft.difficulty_level not in DIFFICULTY_LEVELS:
        raise QuizValidationError(f"difficultyLevel must be one of {', '.join(DIFFICULTY_LEVELS)}")
    if not draft.options:
        raise QuizValidationError("at least one answer option is required")
    if any(not option.text.strip() for option in draft.options):
        raise QuizValidationError("answer option text is required")
    correct = sum(1 for option in draft.options if option.is_correct)
    if correct != 1:
        raise QuizValidationError(f"exactly one option must be correct, got {correct}")


async def create_question(session: AsyncSession, *, draft: QuestionDraft) -> Question:
    validate_draft(draft)
    if await CategoriesRepo.get_by_id(session, draft.category_id) is None:
        raise CategoryNotFoundError
    if await QuestionTypesRepo.get_by_id(session, draft.question_type_id) is None:
        raise QuestionTypeNotFoundError

    question = await QuestionsRepo.create(
        session,
        question=Question(
            category_id=draft.category_id,
            question_type_id=draft.question_type_id,
            question_text=draft.question_text.strip(),
            explanation=draft.explanation,
            hint_text=draft.hint_text,
            image_url=draft.image_url,
            points=draft.points,
            difficulty_level=draft.difficulty_level,
            is_active=draft.is_active,
        ),
    )
    await QuestionsRepo.add_options(session, options=_build_options(question.id, draft.options))
    await CategoriesRepo.recount_total_questions(session, category_id=draft.category_id)

    logger.info(
        "quiz_question_created",
        question_id=question.id,
        category_id=draft.category_id,
        question_type_id=draft.question_type_id,
        options=len(draft.options),
    )
    return question


def _build_options(question_id: int, drafts: Sequence[OptionDraft]) -> list[AnswerOption]:
    return [
        AnswerOption(
            question_id=question_id,
            option_text=option.text.strip(),
            icon=option.icon or "",
            image_url=option.image_url,
            is_correct=option.is_correct,
            order_position=position,
        )
        for position, option in enumerate(drafts, start=1)
    ]
