from __future__ import annotations

import random

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.questions import Question
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.question_types_repo import QuestionTypesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.db.repo.users_repo import UsersRepo
from app.quiz.constants import EASIER_QUESTION_TYPE_NAMES, EASY_DIFFICULTY_LEVEL
from app.quiz.errors import CategoryNotFoundError, QuestionNotFoundError, UserNotFoundError
from app.quiz.performance.service import PerformanceService
from app.quiz.selection.rules import choose_target_type_id, pick_question_id
from app.quiz.types import OptionView, QuestionView

logger = structlog.get_logger(__name__)


class QuestionSelector:
    @staticmethod
    async def _resolve_easier_type_ids(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
    ) -> list[int]:
        easier_type_ids = await QuestionTypesRepo.list_ids_by_difficulty_and_names(
            session,
            difficulty_level=EASY_DIFFICULTY_LEVEL,
            type_names=EASIER_QUESTION_TYPE_NAMES,
        )
        # Prefer easier formats that can still serve a question in this category.
        servable_type_ids = await QuestionsRepo.list_unattempted_type_ids(
            session,
            user_id=user_id,
            category_id=category_id,
        )
        servable_easier = [type_id for type_id in easier_type_ids if type_id in servable_type_ids]
        return servable_easier or easier_type_ids

    @staticmethod
    async def select_next_question(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
        rng: random.Random | None = None,
    ) -> Question | None:
        chooser = rng or random.Random()
        stats = await PerformanceService.load_type_stats(session, user_id=user_id)
        easier_type_ids = await QuestionSelector._resolve_easier_type_ids(
            session,
            user_id=user_id,
            category_id=category_id,
        )
        target_type_id = choose_target_type_id(stats, easier_type_ids=easier_type_ids, rng=chooser)

        selected_id: int | None = None
        if target_type_id is not None:
            candidate_ids = await QuestionsRepo.list_unattempted_ids(
                session,
                user_id=user_id,
                category_id=category_id,
                question_type_ids=(target_type_id,),
            )
            selected_id = pick_question_id(candidate_ids, rng=chooser)

        if selected_id is None:
            fallback_ids = await QuestionsRepo.list_unattempted_ids(
                session,
                user_id=user_id,
                category_id=category_id,
            )
            selected_id = pick_question_id(fallback_ids, rng=chooser)

        if selected_id is None:
            logger.info("quiz_category_exhausted", user_id=user_id, category_id=category_id)
            return None

        logger.debug(
            "quiz_question_selected",
            user_id=user_id,
            category_id=category_id,
            target_question_type_id=target_type_id,
            question_id=selected_id,
        )
        return await QuestionsRepo.get_by_id(session, selected_id)

    @staticmethod
    async def build_question_view(session: AsyncSession, question_id: int) -> QuestionView:
        loaded = await QuestionsRepo.get_with_type_name(session, question_id)
        if loaded is None:
            raise QuestionNotFoundError
        question, type_name = loaded
        options = await QuestionsRepo.list_options(session, question.id)
        return QuestionView(
            id=question.id,
            category_id=question.category_id,
            question_type_id=question.question_type_id,
            type_name=type_name,
            question_text=question.question_text,
            image_url=question.image_url,
            difficulty_level=question.difficulty_level,
            points=question.points,
            hint_text=question.hint_text,
            options=tuple(
                OptionView(
                    id=option.id,
                    option_text=option.option_text,
                    icon=option.icon,
                    image_url=option.image_url,
                    order_position=option.order_position,
                )
                for option in options
            ),
        )

    @staticmethod
    async def next_question_for_user(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
        rng: random.Random | None = None,
    ) -> QuestionView | None:
        if await UsersRepo.get_by_id(session, user_id) is None:
            raise UserNotFoundError
        if await CategoriesRepo.get_by_id(session, category_id) is None:
            raise CategoryNotFoundError

        question = await QuestionSelector.select_next_question(
            session,
            user_id=user_id,
            category_id=category_id,
            rng=rng,
        )
        if question is None:
            return None
        return await QuestionSelector.build_question_view(session, question.id)
