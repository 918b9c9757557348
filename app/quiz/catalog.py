from __future__ import annotations

from dataclasses import dataclass

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.badges import Badge
from app.db.models.categories import Category
from app.db.models.question_types import QuestionType
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.quiz.authoring import OptionDraft, QuestionDraft, create_question

logger = structlog.get_logger(__name__)

MULTIPLE_CHOICE = 1
TRUE_FALSE = 2
VISUAL_CHOICE = 3

PHONE_SAFETY = 1
PASSWORDS = 2
SAFE_CLICKING = 3
STRANGER_DANGER = 4

CATEGORIES: tuple[tuple[int, str, str, str], ...] = (
    (PHONE_SAFETY, "Phone Safety", "📱", "Learn how to use phones safely and avoid dangerous calls"),
    (PASSWORDS, "Passwords", "🔐", "Understand why passwords are important and how to keep them secret"),
    (SAFE_CLICKING, "Safe Clicking", "🖱️", "Learn what links and buttons are safe to click"),
    (STRANGER_DANGER, "Stranger Danger", "👤", "Know how to stay safe from strangers online and offline"),
)

QUESTION_TYPES: tuple[tuple[int, str, str, str], ...] = (
    (MULTIPLE_CHOICE, "multiple_choice", "easy", "Choose the best answer from multiple options"),
    (TRUE_FALSE, "true_false", "easy", "Decide if a statement is true or false"),
    (VISUAL_CHOICE, "visual_choice", "easy", "Choose the correct answer using pictures"),
    (4, "drag_drop", "medium", "Drag items to the correct places"),
    (5, "scenario_based", "medium", "Answer based on a real-life situation"),
)

# (id, name, description, icon, category_id, requirement_type, requirement_value)
BADGES: tuple[tuple[int, str, str, str, int | None, str, int], ...] = (
    (1, "First Steps", "Answer your first question correctly!", "⭐", None, "questions_answered", 1),
    (2, "Phone Guardian", "Complete all Phone Safety questions", "📱", PHONE_SAFETY, "category_complete", 1),
    (3, "Password Hero", "Complete all Password questions", "🔐", PASSWORDS, "category_complete", 1),
    (4, "Click Champion", "Complete all Safe Clicking questions", "🖱️", SAFE_CLICKING, "category_complete", 1),
    (5, "Safety Star", "Complete all Stranger Danger questions", "👤", STRANGER_DANGER, "category_complete", 1),
    (6, "Point Collector", "Earn 100 points", "💯", None, "points", 100),
    (7, "Streak Master", "Get 5 questions right in a row", "🔥", None, "streak", 5),
    (8, "Quiz Pro", "Answer 50 questions", "🏆", None, "questions_answered", 50),
)

TRUE_IS_WRONG = (OptionDraft("True", False, "✅"), OptionDraft("False", True, "❌"))
TRUE_IS_RIGHT = (OptionDraft("True", True, "✅"), OptionDraft("False", False, "❌"))


@dataclass(frozen=True, slots=True)
class StarterQuestion:
    category_id: int
    question_type_id: int
    question_text: str
    explanation: str
    hint_text: str
    options: tuple[OptionDraft, ...]


STARTER_QUESTIONS: tuple[StarterQuestion, ...] = (
    StarterQuestion(
        PHONE_SAFETY,
        MULTIPLE_CHOICE,
        "Someone you don't know calls and asks for your mom's credit card number. What should you do?",
        "Never give personal information to strangers on the phone. Always tell a grown-up about these calls.",
        "Think about what your parents taught you about talking to strangers.",
        (
            OptionDraft("Give them the numbers", False, "📞"),
            OptionDraft("Tell mom about the call", True, "👩"),
            OptionDraft("Hang up and ignore", False, "🔇"),
        ),
    ),
    StarterQuestion(
        PHONE_SAFETY,
        TRUE_FALSE,
        "True or False: It's okay to answer the phone when mom and dad are not home.",
        "It's safer to let the answering machine or voicemail pick up when parents aren't around.",
        "What would keep you safest?",
        TRUE_IS_WRONG,
    ),
    StarterQuestion(
        PHONE_SAFETY,
        MULTIPLE_CHOICE,
        "Your phone rings and the caller ID shows a number you don't recognize. What's the BEST thing to do?",
        "Letting unknown calls go to voicemail is the safest choice. Important callers will leave a message.",
        "What would keep you safest?",
        (
            OptionDraft("Answer and see who it is", False, "📞"),
            OptionDraft("Let it go to voicemail", True, "📧"),
            OptionDraft("Call the number back", False, "↩️"),
        ),
    ),
    StarterQuestion(
        PHONE_SAFETY,
        TRUE_FALSE,
        "True or False: If someone calls saying they have a prize for you, it's okay to give them your address.",
        "Real prizes don't require you to give personal information over the phone. These calls are often scams.",
        "Do real prizes usually work this way?",
        TRUE_IS_WRONG,
    ),
    StarterQuestion(
        PASSWORDS,
        VISUAL_CHOICE,
        "Which password is the STRONGEST?",
        "Strong passwords use a mix of letters, numbers, and symbols. They're also longer and don't use common words.",
        "Look for the longest one with different types of characters.",
        (
            OptionDraft("password123", False, "🔓"),
            OptionDraft("MyBirthday2023", False, "🎂"),
            OptionDraft("Blue7$Elephant!Fun", True, "🔐"),
            OptionDraft("123456789", False, "🔢"),
        ),
    ),
    StarterQuestion(
        PASSWORDS,
        TRUE_FALSE,
        "True or False: It's okay to share your password with your best friend.",
        "Passwords should only be shared with trusted adults like parents. Even best friends shouldn't know your passwords.",
        "Who should know your secret information?",
        TRUE_IS_WRONG,
    ),
    StarterQuestion(
        PASSWORDS,
        MULTIPLE_CHOICE,
        "Which of these should NEVER be used in a password?",
        "Your real name, birthday, and pet's name are easy for others to guess. Good passwords use information that's hard to guess.",
        "What information about you do other people know?",
        (
            OptionDraft("Your favorite color", False, "🎨"),
            OptionDraft("Your real name", True, "👤"),
            OptionDraft("Random words", False, "🎲"),
            OptionDraft("Made-up words", False, "✨"),
        ),
    ),
    StarterQuestion(
        PASSWORDS,
        TRUE_FALSE,
        "True or False: Writing down passwords on paper and keeping them safe is better than using the same easy password for everything.",
        "It's better to write down different strong passwords and keep the paper safe than to use one weak password everywhere.",
        "Think about what's safer overall.",
        TRUE_IS_RIGHT,
    ),
    StarterQuestion(
        SAFE_CLICKING,
        MULTIPLE_CHOICE,
        "You get a popup that says 'You've won $1000! Click here!' What should you do?",
        "Popup ads that claim you've won prizes are usually fake and can be dangerous. Close them without clicking.",
        "Do you remember entering any contests?",
        (
            OptionDraft("Click to see what you won", False, "🎁"),
            OptionDraft("Close the popup without clicking", True, "❌"),
            OptionDraft("Share it with friends", False, "👥"),
            OptionDraft("Take a screenshot first", False, "📸"),
        ),
    ),
    StarterQuestion(
        SAFE_CLICKING,
        TRUE_FALSE,
        "True or False: If a website looks colorful and fun, it's always safe for kids.",
        "The way a website looks doesn't tell you if it's safe. Even colorful sites can have dangerous content or links.",
        "Can appearances be deceiving?",
        TRUE_IS_WRONG,
    ),
    StarterQuestion(
        SAFE_CLICKING,
        VISUAL_CHOICE,
        "Which link looks SAFEST to click on a kids' website?",
        "Links to games on trusted kids' sites are usually safe. Avoid links asking for downloads or personal information.",
        "Look for something fun but not asking for anything.",
        (
            OptionDraft("Download Free Games Now!", False, "⬇️"),
            OptionDraft("Enter Your Info to Win!", False, "📝"),
            OptionDraft("Play Puzzle Game", True, "🧩"),
            OptionDraft("Click for Secret Prize!", False, "🎁"),
        ),
    ),
    StarterQuestion(
        SAFE_CLICKING,
        TRUE_FALSE,
        "True or False: It's safe to click on ads that appear in your games.",
        "Game ads can sometimes lead to inappropriate websites or try to trick you. It's better to avoid clicking on ads.",
        "What are ads trying to do?",
        TRUE_IS_WRONG,
    ),
    StarterQuestion(
        STRANGER_DANGER,
        MULTIPLE_CHOICE,
        "Someone you don't know sends you a friend request online and wants to meet in person. What should you do?",
        "Never agree to meet someone in person that you only know online. Always tell a trusted adult about these requests.",
        "Who should help you make decisions about meeting new people?",
        (
            OptionDraft("Agree to meet in a public place", False, "🏪"),
            OptionDraft("Tell a trusted adult immediately", True, "👨‍👩‍👧"),
            OptionDraft("Ask them more questions first", False, "❓"),
            OptionDraft("Block them but don't tell anyone", False, "🚫"),
        ),
    ),
    StarterQuestion(
        STRANGER_DANGER,
        TRUE_FALSE,
        "True or False: If someone online says they're the same age as you, it's okay to share personal information.",
        "People online can lie about their age and identity. Never share personal information with people you meet online.",
        "Can people lie about who they are online?",
        TRUE_IS_WRONG,
    ),
    StarterQuestion(
        STRANGER_DANGER,
        VISUAL_CHOICE,
        "An online friend asks for photos of you. What's the BEST response?",
        "Never send photos to people you only know online. This could be dangerous and the photos could be misused.",
        "Think about what could happen to your photos.",
        (
            OptionDraft("Send a recent school photo", False, "📷"),
            OptionDraft("Don't send photos and tell an adult", True, "🛡️"),
            OptionDraft("Only send photos of your pets", False, "🐕"),
            OptionDraft("Ask them to send photos first", False, "📸"),
        ),
    ),
)


@dataclass(slots=True)
class SeedSummary:
    categories_added: int = 0
    question_types_added: int = 0
    badges_added: int = 0
    questions_added: int = 0


async def seed_catalog(session: AsyncSession, *, starter_points: int = 15) -> SeedSummary:
    """Inserts the reference catalog and starter questions; rows that already exist are kept."""
    summary = SeedSummary()

    for category_id, name, icon, description in CATEGORIES:
        if await session.get(Category, category_id) is None:
            session.add(Category(id=category_id, name=name, icon=icon, description=description, total_questions=0))
            summary.categories_added += 1
    for type_id, type_name, difficulty, description in QUESTION_TYPES:
        if await session.get(QuestionType, type_id) is None:
            session.add(
                QuestionType(id=type_id, type_name=type_name, difficulty_level=difficulty, description=description)
            )
            summary.question_types_added += 1
    await session.flush()

    for badge_id, name, description, icon, category_id, requirement_type, value in BADGES:
        if await session.get(Badge, badge_id) is None:
            session.add(
                Badge(
                    id=badge_id,
                    name=name,
                    description=description,
                    icon=icon,
                    category_id=category_id,
                    requirement_type=requirement_type,
                    requirement_value=value,
                )
            )
            summary.badges_added += 1
    await session.flush()

    await _sync_id_sequences(session)

    for starter in STARTER_QUESTIONS:
        existing = await QuestionsRepo.find_in_category_by_text(
            session,
            category_id=starter.category_id,
            question_text=starter.question_text,
        )
        if existing is not None:
            continue
        await create_question(
            session,
            draft=QuestionDraft(
                category_id=starter.category_id,
                question_type_id=starter.question_type_id,
                question_text=starter.question_text,
                explanation=starter.explanation,
                hint_text=starter.hint_text,
                points=starter_points,
                options=starter.options,
            ),
        )
        summary.questions_added += 1

    await CategoriesRepo.recount_total_questions(session)
    logger.info(
        "quiz_catalog_seeded",
        categories_added=summary.categories_added,
        question_types_added=summary.question_types_added,
        badges_added=summary.badges_added,
        questions_added=summary.questions_added,
    )
    return summary


async def _sync_id_sequences(session: AsyncSession) -> None:
    if session.get_bind().dialect.name != "postgresql":
        return
    for table in ("categories", "question_types", "badges"):
        await session.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"(SELECT COALESCE(MAX(id), 1) FROM {table}))"
            )
        )
