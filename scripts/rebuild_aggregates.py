from __future__ import annotations

import argparse
import asyncio
from datetime import datetime, timezone

from sqlalchemy import select

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.models.users import User
from app.db.session import SessionLocal
from app.quiz.aggregates import rebuild_user_aggregates
from app.quiz.errors import UserNotFoundError


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Recompute user_progress and user_question_type_performance from question_attempts.",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--user-id", type=int, action="append", dest="user_ids")
    target.add_argument("--all-users", action="store_true")
    return parser.parse_args()


async def _list_user_ids() -> list[int]:
    async with SessionLocal() as session:
        result = await session.execute(select(User.id).order_by(User.id.asc()))
        return [int(user_id) for user_id in result.scalars().all()]


async def _run(args: argparse.Namespace) -> int:
    user_ids = await _list_user_ids() if args.all_users else list(args.user_ids)
    failed = 0
    for user_id in user_ids:
        try:
            async with SessionLocal.begin() as session:
                aggregates = await rebuild_user_aggregates(
                    session,
                    user_id=user_id,
                    now_utc=datetime.now(timezone.utc),
                )
        except UserNotFoundError:
            print(f"rebuild_aggregates user_id={user_id} status=not_found")  # noqa: T201
            failed += 1
            continue
        print(  # noqa: T201
            f"rebuild_aggregates user_id={user_id} status=ok "
            f"categories={len(aggregates.progress)} question_types={len(aggregates.performance)}"
        )
    return 1 if failed else 0


def main() -> int:
    configure_logging(get_settings().log_level)
    return asyncio.run(_run(_parse_args()))


if __name__ == "__main__":
    raise SystemExit(main())
