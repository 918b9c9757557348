from __future__ import annotations

import random
from collections.abc import Collection, Sequence

from app.quiz.performance.rules import find_struggling_type
from app.quiz.performance.types import TypeStat


def choose_target_type_id(
    ordered_stats: Sequence[TypeStat],
    *,
    easier_type_ids: Collection[int],
    rng: random.Random,
) -> int | None:
    """Weakest type by default; an easier format once any type is a struggle."""
    if not ordered_stats:
        return None

    target_type_id = ordered_stats[0].question_type_id
    if find_struggling_type(ordered_stats) is None:
        return target_type_id
    if not easier_type_ids:
        return target_type_id
    return rng.choice(sorted(easier_type_ids))


def pick_question_id(candidate_ids: Sequence[int], *, rng: random.Random) -> int | None:
    if not candidate_ids:
        return None
    return rng.choice(list(candidate_ids))
