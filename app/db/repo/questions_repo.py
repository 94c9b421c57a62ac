from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.categories import Category
from app.db.models.question_interactions import QuestionInteraction
from app.db.models.questions import Question


def _answered_in_quiz_exists(user_id: int):
    return (
        select(QuestionInteraction.id)
        .where(
            QuestionInteraction.question_id == Question.id,
            QuestionInteraction.user_id == user_id,
            QuestionInteraction.quiz_id.is_not(None),
        )
        .exists()
    )


class QuestionsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, question_id: int) -> Question | None:
        return await session.get(Question, question_id)

    @staticmethod
    async def list_by_ids(
        session: AsyncSession,
        *,
        question_ids: Sequence[int],
    ) -> list[Question]:
        if not question_ids:
            return []
        stmt = select(Question).where(Question.id.in_(tuple(question_ids)))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def count_unanswered_for_user(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
    ) -> int:
        stmt = select(func.count(Question.id)).where(
            Question.category_id == category_id,
            ~_answered_in_quiz_exists(user_id),
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def list_unanswered_for_user(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
        limit: int,
    ) -> list[Question]:
        stmt = (
            select(Question)
            .where(
                Question.category_id == category_id,
                ~_answered_in_quiz_exists(user_id),
            )
            .order_by(Question.id.asc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_page(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
        search: str | None = None,
        category_id: int | None = None,
    ) -> tuple[list[tuple[Question, str]], int]:
        conditions = []
        if search:
            conditions.append(Question.question_text.ilike(f"%{search}%", escape="\\"))
        if category_id is not None:
            conditions.append(Question.category_id == category_id)

        stmt = (
            select(Question, Category.name)
            .join(Category, Category.id == Question.category_id)
            .where(*conditions)
            .order_by(Question.id.desc())
            .limit(limit)
            .offset(offset)
        )
        count_stmt = select(func.count(Question.id)).where(*conditions)
        rows = await session.execute(stmt)
        total = await session.execute(count_stmt)
        return [(question, name) for question, name in rows.all()], int(total.scalar_one() or 0)

    @staticmethod
    async def create(session: AsyncSession, *, question: Question) -> Question:
        session.add(question)
        await session.flush()
        return question

    @staticmethod
    async def delete_by_id(session: AsyncSession, question_id: int) -> int:
        result = await session.execute(delete(Question).where(Question.id == question_id))
        return result.rowcount or 0

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        result = await session.execute(select(func.count(Question.id)))
        return int(result.scalar_one() or 0)
