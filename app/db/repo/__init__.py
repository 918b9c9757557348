from app.db.repo.badges_repo import BadgesRepo
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.performance_repo import PerformanceRepo
from app.db.repo.progress_repo import ProgressRepo
from app.db.repo.question_attempts_repo import QuestionAttemptsRepo
from app.db.repo.question_types_repo import QuestionTypesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.db.repo.users_repo import UsersRepo

__all__ = [
    "BadgesRepo",
    "CategoriesRepo",
    "PerformanceRepo",
    "ProgressRepo",
    "QuestionAttemptsRepo",
    "QuestionTypesRepo",
    "QuestionsRepo",
    "UsersRepo",
]
