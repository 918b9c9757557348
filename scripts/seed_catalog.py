from __future__ import annotations

import argparse
import asyncio

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.quiz.catalog import seed_catalog


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Insert the reference categories, question types, badges and starter questions.",
    )
    parser.add_argument(
        "--starter-points",
        type=int,
        default=15,
        help="Points awarded by each starter question that gets inserted.",
    )
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    async with SessionLocal.begin() as session:
        summary = await seed_catalog(session, starter_points=args.starter_points)

    print(  # noqa: T201
        "seed_catalog "
        f"categories_added={summary.categories_added} "
        f"question_types_added={summary.question_types_added} "
        f"badges_added={summary.badges_added} "
        f"questions_added={summary.questions_added}"
    )
    return 0


def main() -> int:
    configure_logging(get_settings().log_level)
    args = _parse_args()
    if args.starter_points < 0:
        print("seed_catalog failed: --starter-points must not be negative")  # noqa: T201
        return 2
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
