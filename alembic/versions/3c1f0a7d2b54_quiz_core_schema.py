"""quiz_core_schema

Revision ID: 3c1f0a7d2b54
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "3c1f0a7d2b54"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("best_streak", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("last_active", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("total_points >= 0", name="ck_users_total_points_non_negative"),
        sa.CheckConstraint("current_streak >= 0", name="ck_users_current_streak_non_negative"),
        sa.CheckConstraint("best_streak >= current_streak", name="ck_users_best_streak_high_water"),
        sa.UniqueConstraint("name", name="uq_users_name"),
    )
    op.create_index("idx_users_leaderboard", "users", ["total_points", "best_streak"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("icon", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("total_questions", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("total_questions >= 0", name="ck_categories_total_questions_non_negative"),
    )

    op.create_table(
        "question_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type_name", sa.String(50), nullable=False),
        sa.Column("difficulty_level", sa.String(8), nullable=False, server_default=sa.text("'easy'")),
        sa.Column("description", sa.Text(), nullable=True),
        sa.CheckConstraint("difficulty_level IN ('easy','medium','hard')", name="ck_question_types_difficulty_level"),
        sa.UniqueConstraint("type_name", name="uq_question_types_type_name"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("question_type_id", sa.Integer(), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(255), nullable=True),
        sa.Column("difficulty_level", sa.String(8), nullable=False, server_default=sa.text("'easy'")),
        sa.Column("points", sa.Integer(), nullable=False, server_default=sa.text("10")),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("hint_text", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("points >= 0", name="ck_questions_points_non_negative"),
        sa.CheckConstraint("difficulty_level IN ('easy','medium','hard')", name="ck_questions_difficulty_level"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.ForeignKeyConstraint(["question_type_id"], ["question_types.id"]),
    )
    op.create_index(
        "idx_questions_category_type_active",
        "questions",
        ["category_id", "question_type_id", "is_active"],
    )

    op.create_table(
        "answer_options",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("option_text", sa.String(255), nullable=False),
        sa.Column("icon", sa.String(50), nullable=True),
        sa.Column("image_url", sa.String(255), nullable=True),
        sa.Column("is_correct", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("order_position", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_answer_options_question_position",
        "answer_options",
        ["question_id", "order_position"],
    )

    op.create_table(
        "badges",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(50), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("requirement_type", sa.String(32), nullable=False),
        sa.Column("requirement_value", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint(
            "requirement_type IN ('points','category_complete','streak','questions_answered')",
            name="ck_badges_requirement_type",
        ),
        sa.CheckConstraint("requirement_value >= 0", name="ck_badges_requirement_value_non_negative"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
    )

    op.create_table(
        "user_badges",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("badge_id", sa.Integer(), nullable=False),
        sa.Column("earned_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["badge_id"], ["badges.id"]),
        sa.UniqueConstraint("user_id", "badge_id", name="uq_user_badges_user_badge"),
    )

    op.create_table(
        "question_attempts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("question_type_id", sa.Integer(), nullable=False),
        sa.Column("selected_answer_id", sa.Integer(), nullable=True),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("time_taken", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("hint_used", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("attempted_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("time_taken >= 0", name="ck_question_attempts_time_taken_non_negative"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"]),
        sa.ForeignKeyConstraint(["question_type_id"], ["question_types.id"]),
        sa.ForeignKeyConstraint(["selected_answer_id"], ["answer_options.id"]),
    )
    op.create_index("idx_question_attempts_user_question", "question_attempts", ["user_id", "question_id"])
    op.create_index("idx_question_attempts_user_time", "question_attempts", ["user_id", "attempted_at"])

    op.create_table(
        "user_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("questions_answered", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("correct_answers", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("points_earned", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("last_question_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("questions_answered >= 0", name="ck_user_progress_answered_non_negative"),
        sa.CheckConstraint(
            "correct_answers >= 0 AND correct_answers <= questions_answered",
            name="ck_user_progress_correct_range",
        ),
        sa.CheckConstraint("points_earned >= 0", name="ck_user_progress_points_non_negative"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.ForeignKeyConstraint(["last_question_id"], ["questions.id"]),
        sa.UniqueConstraint("user_id", "category_id", name="uq_user_progress_user_category"),
    )

    op.create_table(
        "user_question_type_performance",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("question_type_id", sa.Integer(), nullable=False),
        sa.Column("total_attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("correct_attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("success_rate", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("avg_time_taken", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_attempted", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "correct_attempts >= 0 AND correct_attempts <= total_attempts",
            name="ck_user_question_type_performance_correct_range",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["question_type_id"], ["question_types.id"]),
        sa.UniqueConstraint(
            "user_id",
            "question_type_id",
            name="uq_user_question_type_performance_user_type",
        ),
    )


def downgrade() -> None:
    op.drop_table("user_question_type_performance")
    op.drop_table("user_progress")
    op.drop_index("idx_question_attempts_user_time", table_name="question_attempts")
    op.drop_index("idx_question_attempts_user_question", table_name="question_attempts")
    op.drop_table("question_attempts")
    op.drop_table("user_badges")
    op.drop_table("badges")
    op.drop_index("idx_answer_options_question_position", table_name="answer_options")
    op.drop_table("answer_options")
    op.drop_index("idx_questions_category_type_active", table_name="questions")
    op.drop_table("questions")
    op.drop_table("question_types")
    op.drop_table("categories")
    op.drop_index("idx_users_leaderboard", table_name="users")
    op.drop_table("users")
