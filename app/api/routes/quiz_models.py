from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RecordModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserRecord(RecordModel):
    id: int
    name: str
    total_points: int = Field(ge=0)
    current_streak: int = Field(ge=0)
    best_streak: int = Field(ge=0)
    created_at: datetime | None = None
    last_active: datetime | None = None


class CategoryProgressRecord(RecordModel):
    id: int
    name: str
    icon: str
    description: str | None = None
    total_questions: int = Field(ge=0)
    questions_answered: int = Field(ge=0)
    correct_answers: int = Field(ge=0)
    points_earned: int = Field(ge=0)
    is_completed: bool


class OptionRecord(RecordModel):
    id: int
    option_text: str
    icon: str | None = None
    image_url: str | None = None
    order_position: int


class QuestionRecord(RecordModel):
    id: int
    category_id: int
    question_type_id: int
    type_name: str
    question_text: str
    image_url: str | None = None
    difficulty_level: str
    points: int
    hint_text: str | None = None
    options: list[OptionRecord]


class BadgeRecord(RecordModel):
    id: int
    name: str
    description: str | None = None
    icon: str | None = None
    category_id: int | None = None
    requirement_type: str
    requirement_value: int
    earned_at: datetime | None = None


class LeaderboardRecord(RecordModel):
    name: str
    total_points: int
    best_streak: int
    badge_count: int


class CreateUserRequest(CamelModel):
    name: str | None = None


class UserResponse(CamelModel):
    user: UserRecord


class CreateUserResponse(CamelModel):
    message: str
    user: UserRecord


class CategoriesResponse(CamelModel):
    categories: list[CategoryProgressRecord]


class NextQuestionResponse(CamelModel):
    question: QuestionRecord | None
    message: str | None = None


class SubmitAnswerRequest(CamelModel):
    user_id: int = Field(alias="userId")
    question_id: int = Field(alias="questionId")
    selected_answer_id: int = Field(alias="selectedAnswerId")
    time_taken: int = Field(default=0, ge=0, alias="timeTaken")
    hint_used: bool = Field(default=False, alias="hintUsed")


class SubmitAnswerResponse(CamelModel):
    is_correct: bool = Field(alias="isCorrect")
    points_earned: int = Field(alias="pointsEarned")
    explanation: str | None = None
    correct_answer: str = Field(alias="correctAnswer")
    new_badges: list[BadgeRecord] = Field(alias="newBadges")


class ProgressResponse(CamelModel):
    user: UserRecord
    category_progress: list[CategoryProgressRecord] = Field(alias="categoryProgress")
    earned_badges: list[BadgeRecord] = Field(alias="earnedBadges")
    all_badges: list[BadgeRecord] = Field(alias="allBadges")


class LeaderboardResponse(CamelModel):
    leaderboard: list[LeaderboardRecord]


class ResetProgressRequest(CamelModel):
    user_id: int = Field(alias="userId")
    category_id: int = Field(alias="categoryId")


class ResetProgressResponse(CamelModel):
    message: str
    user_id: int = Field(alias="userId")
    category_id: int = Field(alias="categoryId")
    attempts_removed: int = Field(ge=0, alias="attemptsRemoved")
    total_points: int = Field(ge=0, alias="totalPoints")


class AdminOptionRequest(CamelModel):
    text: str = Field(min_length=1, max_length=255)
    icon: str | None = Field(default=None, max_length=50)
    image_url: str | None = Field(default=None, max_length=255, alias="imageUrl")
    is_correct: bool = Field(default=False, alias="isCorrect")


class AdminQuestionRequest(CamelModel):
    category_id: int = Field(alias="categoryId")
    question_type_id: int = Field(alias="questionTypeId")
    question_text: str = Field(min_length=1, alias="questionText")
    explanation: str | None = None
    hint_text: str | None = Field(default=None, alias="hintText")
    image_url: str | None = Field(default=None, max_length=255, alias="imageUrl")
    points: int = Field(default=10, ge=0)
    difficulty_level: str = Field(default="easy", alias="difficultyLevel")
    options: list[AdminOptionRequest] = Field(default_factory=list)


class AdminQuestionResponse(CamelModel):
    message: str
    question_id: int = Field(alias="questionId")
