from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("points >= 0", name="ck_questions_points_non_negative"),
        CheckConstraint(
            "difficulty_level IN ('easy','medium','hard')",
            name="ck_questions_difficulty_level",
        ),
        Index("idx_questions_category_type_active", "category_id", "question_type_id", "is_active"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("categories.id"), nullable=False)
    question_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question_types.id"),
        nullable=False,
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    difficulty_level: Mapped[str] = mapped_column(String(8), nullable=False, default="easy")
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    hint_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
