from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.users_repo import LEADERBOARD_MAX_ROWS, UsersRepo


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    rank: int
    username: str
    total_score: int
    quiz_count: int
    average_score: int


def average_quiz_score(total_score: int, play_count: int) -> int:
    if play_count <= 0:
        return 0
    return (total_score * 2 + play_count) // (2 * play_count)


async def build_leaderboard(
    session: AsyncSession,
    *,
    limit: int = LEADERBOARD_MAX_ROWS,
) -> list[LeaderboardEntry]:
    users = await UsersRepo.list_leaderboard(session, limit=limit)
    return [
        LeaderboardEntry(
            rank=position,
            username=user.username,
            total_score=user.total_score,
            quiz_count=user.total_play_count,
            average_score=average_quiz_score(user.total_score, user.total_play_count),
        )
        for position, user in enumerate(users, start=1)
    ]
