from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class QuestionAttempt(Base):
    """Append-only answer log; progress and performance rows are aggregates over it."""

    __tablename__ = "question_attempts"
    __table_args__ = (
        CheckConstraint("time_taken >= 0", name="ck_question_attempts_time_taken_non_negative"),
        Index("idx_question_attempts_user_question", "user_id", "question_id"),
        Index("idx_question_attempts_user_time", "user_id", "attempted_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    question_id: Mapped[int] = mapped_column(Integer, ForeignKey("questions.id"), nullable=False)
    question_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question_types.id"),
        nullable=False,
    )
    selected_answer_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("answer_options.id"),
        nullable=True,
    )
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    time_taken: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hint_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    attempted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
