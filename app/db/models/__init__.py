from app.db.models.answer_options import AnswerOption
from app.db.models.badges import Badge
from app.db.models.base import Base
from app.db.models.categories import Category
from app.db.models.question_attempts import QuestionAttempt
from app.db.models.question_types import QuestionType
from app.db.models.questions import Question
from app.db.models.user_badges import UserBadge
from app.db.models.user_progress import UserProgress
from app.db.models.user_question_type_performance import UserQuestionTypePerformance
from app.db.models.users import User

__all__ = [
    "AnswerOption",
    "Badge",
    "Base",
    "Category",
    "Question",
    "QuestionAttempt",
    "QuestionType",
    "User",
    "UserBadge",
    "UserProgress",
    "UserQuestionTypePerformance",
]
