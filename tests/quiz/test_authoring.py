from __future__ import annotations

import pytest

from app.db.models.categories import Category
from app.db.repo.questions_repo import QuestionsRepo
from app.quiz.authoring import OptionDraft, QuestionDraft, create_question, validate_draft
from app.quiz.errors import CategoryNotFoundError, QuestionTypeNotFoundError, QuizValidationError
from tests.quiz_fixtures import TRUE_FALSE, _create_category


def _draft(**overrides) -> QuestionDraft:
    values = {
        "category_id": 1,
        "question_type_id": TRUE_FALSE,
        "question_text": "True or False: share your password with friends.",
        "options": (OptionDraft("True", False, "✅"), OptionDraft("False", True, "❌")),
        "explanation": "Passwords are secret.",
        "points": 15,
    }
    values.update(overrides)
    return QuestionDraft(**values)


@pytest.mark.parametrize(
    "options",
    [
        (),
        (OptionDraft("True", False), OptionDraft("False", False)),
        (OptionDraft("True", True), OptionDraft("False", True)),
        (OptionDraft("   ", True), OptionDraft("False", False)),
    ],
)
def test_validate_draft_rejects_bad_option_lists(options) -> None:
    with pytest.raises(QuizValidationError):
        validate_draft(_draft(options=options))


@pytest.mark.parametrize(
    "overrides",
    [
        {"question_text": "   "},
        {"points": -5},
        {"difficulty_level": "extreme"},
    ],
)
def test_validate_draft_rejects_bad_question_fields(overrides) -> None:
    with pytest.raises(QuizValidationError):
        validate_draft(_draft(**overrides))


def test_validate_draft_accepts_exactly_one_correct_option() -> None:
    validate_draft(_draft())


@pytest.mark.asyncio
async def test_create_question_stores_ordered_options_and_recounts_category(session_factory) -> None:
    category_id = await _create_category(session_factory)

    async with session_factory.begin() as session:
        first = await create_question(session, draft=_draft(category_id=category_id))
        await create_question(session, draft=_draft(category_id=category_id, question_text="Second one"))

    async with session_factory() as session:
        options = await QuestionsRepo.list_options(session, first.id)
        category = await session.get(Category, category_id)

    assert [(option.option_text, option.order_position, option.is_correct) for option in options] == [
        ("True", 1, False),
        ("False", 2, True),
    ]
    assert [option.icon for option in options] == ["✅", "❌"]
    assert category is not None
    assert category.total_questions == 2


@pytest.mark.asyncio
async def test_create_question_requires_existing_category_and_type(session_factory) -> None:
    category_id = await _create_category(session_factory)

    with pytest.raises(CategoryNotFoundError):
        async with session_factory.begin() as session:
            await create_question(session, draft=_draft(category_id=category_id + 10))
    with pytest.raises(QuestionTypeNotFoundError):
        async with session_factory.begin() as session:
            await create_question(session, draft=_draft(category_id=category_id, question_type_id=99))
