from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_user
from app.api.routes.public_models import QuizHistoryItemResponse, UserProfileResponse
from app.db.session import SessionLocal
from app.game.quizzes.service import QuizResultsService
from app.services.user_auth import SessionUser

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/history")
async def get_history(
    limit: int = Query(default=10, ge=1, le=50),
    current_user: SessionUser = Depends(get_current_user),
) -> list[QuizHistoryItemResponse]:
    async with SessionLocal.begin() as session:
        rows = await QuizResultsService.list_history(session, user_id=current_user.user_id, limit=limit)
    return [QuizHistoryItemResponse(**asdict(row)) for row in rows]


@router.get("/profile")
async def get_profile(current_user: SessionUser = Depends(get_current_user)) -> UserProfileResponse:
    async with SessionLocal.begin() as session:
        profile = await QuizResultsService.get_profile(session, user_id=current_user.user_id)
    return UserProfileResponse(**asdict(profile))
