from __future__ import annotations

from app.quiz.badges.types import BadgeProgressState, BadgeRequirementType


def is_requirement_met(
    *,
    requirement_type: str,
    requirement_value: int,
    category_id: int | None,
    state: BadgeProgressState,
) -> bool:
    try:
        kind = BadgeRequirementType(requirement_type)
    except ValueError:
        return False

    if kind is BadgeRequirementType.POINTS:
        return state.total_points >= requirement_value
    if kind is BadgeRequirementType.STREAK:
        return state.current_streak >= requirement_value
    if kind is BadgeRequirementType.QUESTIONS_ANSWERED:
        return state.questions_answered >= requirement_value
    if category_id is None:
        return False
    return category_id in state.completed_category_ids
