from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter

from app.api.routes.public_models import LeaderboardEntryResponse
from app.db.session import SessionLocal
from app.game.leaderboard import build_leaderboard

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("")
async def get_leaderboard() -> list[LeaderboardEntryResponse]:
    async with SessionLocal.begin() as session:
        entries = await build_leaderboard(session)
    return [LeaderboardEntryResponse(**asdict(entry)) for entry in entries]
