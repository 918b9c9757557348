from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class UserQuestionTypePerformance(Base):
    __tablename__ = "user_question_type_performance"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "question_type_id",
            name="uq_user_question_type_performance_user_type",
        ),
        CheckConstraint(
            "correct_attempts >= 0 AND correct_attempts <= total_attempts",
            name="ck_user_question_type_performance_correct_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    question_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question_types.id"),
        nullable=False,
    )
    total_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    success_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    avg_time_taken: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    last_attempted: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
