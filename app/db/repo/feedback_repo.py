from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.feedback import Feedback


class FeedbackRepo:
    @staticmethod
    async def create(session: AsyncSession, *, feedback: Feedback) -> Feedback:
        session.add(feedback)
        await session.flush()
        return feedback

    @staticmethod
    async def list_page(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
    ) -> tuple[list[Feedback], int]:
        stmt = (
            select(Feedback)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
            .limit(limit)
            .offset(offset)
        )
        rows = await session.execute(stmt)
        total = await session.execute(select(func.count(Feedback.id)))
        return list(rows.scalars().all()), int(total.scalar_one() or 0)

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        result = await session.execute(select(func.count(Feedback.id)))
        return int(result.scalar_one() or 0)
