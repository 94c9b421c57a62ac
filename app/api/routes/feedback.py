from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, status

from app.api.routes.public_models import FeedbackRequest, FeedbackResponse
from app.db.session import SessionLocal
from app.services.feedback import FeedbackService

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_feedback(payload: FeedbackRequest) -> FeedbackResponse:
    async with SessionLocal.begin() as session:
        feedback = await FeedbackService.submit(
            session,
            name=payload.name,
            email=str(payload.email),
            message=payload.message,
            now_utc=datetime.now(timezone.utc),
        )
    return FeedbackResponse(id=feedback.id, created_at=feedback.created_at)
