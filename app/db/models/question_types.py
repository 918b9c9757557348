from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class QuestionType(Base):
    __tablename__ = "question_types"
    __table_args__ = (
        CheckConstraint(
            "difficulty_level IN ('easy','medium','hard')",
            name="ck_question_types_difficulty_level",
        ),
        UniqueConstraint("type_name", name="uq_question_types_type_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type_name: Mapped[str] = mapped_column(String(50), nullable=False)
    difficulty_level: Mapped[str] = mapped_column(String(8), nullable=False, default="easy")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
