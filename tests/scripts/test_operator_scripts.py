from __future__ import annotations

import argparse

import pytest

from app.quiz.catalog import STARTER_QUESTIONS
from scripts import rebuild_aggregates, seed_catalog
from tests.quiz_fixtures import _answer, _create_category, _create_questions, _create_user, _load_user


@pytest.mark.asyncio
async def test_seed_catalog_script_reports_inserted_rows(session_factory, monkeypatch, capsys) -> None:
    monkeypatch.setattr(seed_catalog, "SessionLocal", session_factory)

    exit_code = await seed_catalog._run(argparse.Namespace(starter_points=15))

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "categories_added=4" in output
    assert f"questions_added={len(STARTER_QUESTIONS)}" in output


@pytest.mark.asyncio
async def test_rebuild_aggregates_script_handles_all_users(session_factory, monkeypatch, capsys) -> None:
    monkeypatch.setattr(rebuild_aggregates, "SessionLocal", session_factory)
    category_id = await _create_category(session_factory)
    questions = await _create_questions(session_factory, category_id=category_id, total=2)
    user_id = await _create_user(session_factory)
    await _answer(session_factory, user_id=user_id, question=questions[0])

    exit_code = await rebuild_aggregates._run(argparse.Namespace(all_users=True, user_ids=None))

    assert exit_code == 0
    assert f"user_id={user_id} status=ok categories=1 question_types=1" in capsys.readouterr().out
    assert (await _load_user(session_factory, user_id)).total_points == 15


@pytest.mark.asyncio
async def test_rebuild_aggregates_script_flags_unknown_user(session_factory, monkeypatch, capsys) -> None:
    monkeypatch.setattr(rebuild_aggregates, "SessionLocal", session_factory)

    exit_code = await rebuild_aggregates._run(argparse.Namespace(all_users=False, user_ids=[77]))

    assert exit_code == 1
    assert "user_id=77 status=not_found" in capsys.readouterr().out
