from __future__ import annotations

import os

import pytest
from sqlalchemy import text

from app.core.integration_db_safety import assert_safe_integration_db, integration_db_skip_reason
from app.db.models import Base
from app.db.session import SessionLocal, engine

TRUNCATE_TABLES = (
    "user_question_type_performance",
    "user_progress",
    "question_attempts",
    "user_badges",
    "badges",
    "answer_options",
    "questions",
    "question_types",
    "categories",
    "users",
)

TRUNCATE_SQL = f"TRUNCATE TABLE {', '.join(TRUNCATE_TABLES)} RESTART IDENTITY CASCADE"
REQUIRE_INTEGRATION_DB_ENV = "QUIZ_REQUIRE_INTEGRATION_DB"


@pytest.fixture(scope="session", autouse=True)
def guard_integration_db_target() -> None:
    database_url = engine.url.render_as_string(hide_password=False)
    skip_reason = integration_db_skip_reason(database_url)
    if skip_reason is not None and os.getenv(REQUIRE_INTEGRATION_DB_ENV) != "1":
        pytest.skip(skip_reason)
    assert_safe_integration_db(database_url)


@pytest.fixture(autouse=True)
async def cleanup_db() -> None:
    # Pooled asyncpg connections must not cross event loops between tests.
    await engine.dispose()

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:  # pragma: no cover - environment-dependent
        pytest.skip(f"Postgres is required for integration tests: {exc}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(text(TRUNCATE_SQL))

    yield

    await engine.dispose()


@pytest.fixture
def session_factory():
    return SessionLocal
