from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin.pagination import resolve_page
from app.db.models.feedback import Feedback
from app.db.repo.feedback_repo import FeedbackRepo

logger = structlog.get_logger(__name__)


class FeedbackService:
    @staticmethod
    async def submit(
        session: AsyncSession,
        *,
        name: str,
        email: str,
        message: str,
        now_utc: datetime,
    ) -> Feedback:
        feedback = await FeedbackRepo.create(
            session,
            feedback=Feedback(
                name=name.strip(),
                email=email.strip().lower(),
                message=message.strip(),
                created_at=now_utc,
            ),
        )
        logger.info("feedback_submitted", feedback_id=feedback.id)
        return feedback

    @staticmethod
    async def list_page(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
    ) -> tuple[list[Feedback], int]:
        limit, offset = resolve_page(limit=limit, offset=offset)
        return await FeedbackRepo.list_page(session, limit=limit, offset=offset)
