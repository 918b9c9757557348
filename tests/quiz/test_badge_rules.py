from __future__ import annotations

import pytest

from app.quiz.badges.rules import is_requirement_met
from app.quiz.badges.types import BadgeProgressState

STATE = BadgeProgressState(
    total_points=100,
    current_streak=4,
    questions_answered=12,
    completed_category_ids=frozenset({2}),
)


@pytest.mark.parametrize(
    ("requirement_type", "requirement_value", "category_id", "expected"),
    [
        ("points", 100, None, True),
        ("points", 101, None, False),
        ("streak", 4, None, True),
        ("streak", 5, None, False),
        ("questions_answered", 1, None, True),
        ("questions_answered", 50, None, False),
        ("category_complete", 1, 2, True),
        ("category_complete", 1, 1, False),
        ("category_complete", 1, None, False),
        ("mystery", 0, None, False),
    ],
)
def test_is_requirement_met(
    requirement_type: str,
    requirement_value: int,
    category_id: int | None,
    expected: bool,
) -> None:
    assert (
        is_requirement_met(
            requirement_type=requirement_type,
            requirement_value=requirement_value,
            category_id=category_id,
            state=STATE,
        )
        is expected
    )
