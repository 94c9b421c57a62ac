from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.categories import Category
from app.db.models.quizzes import Quiz


@dataclass(frozen=True, slots=True)
class QuizHistoryRow:
    quiz_id: int
    category_name: str
    score: int
    correct_answers: int
    total_questions: int
    played_at: datetime


@dataclass(frozen=True, slots=True)
class CategoryAverage:
    category_name: str
    average_score: float


class QuizzesRepo:
    @staticmethod
    async def create(session: AsyncSession, *, quiz: Quiz) -> Quiz:
        session.add(quiz)
        await session.flush()
        return quiz

    @staticmethod
    async def get_with_interactions(session: AsyncSession, quiz_id: int) -> Quiz | None:
        stmt = select(Quiz).where(Quiz.id == quiz_id).options(selectinload(Quiz.interactions))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_history_for_user(
        session: AsyncSession,
        *,
        user_id: int,
        limit: int = 10,
    ) -> list[QuizHistoryRow]:
        stmt = (
            select(
                Quiz.id,
                Category.name,
                Quiz.score,
                Quiz.correct_answers,
                Quiz.total_questions,
                Quiz.played_at,
            )
            .join(Category, Category.id == Quiz.category_id)
            .where(Quiz.user_id == user_id)
            .order_by(Quiz.played_at.desc(), Quiz.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [
            QuizHistoryRow(
                quiz_id=quiz_id,
                category_name=category_name,
                score=score,
                correct_answers=correct_answers,
                total_questions=total_questions,
                played_at=played_at,
            )
            for quiz_id, category_name, score, correct_answers, total_questions, played_at in result.all()
        ]

    @staticmethod
    async def list_category_averages_for_user(
        session: AsyncSession,
        *,
        user_id: int,
    ) -> list[CategoryAverage]:
        average_expr = func.avg(Quiz.score)
        stmt = (
            select(Category.name, average_expr)
            .join(Category, Category.id == Quiz.category_id)
            .where(Quiz.user_id == user_id)
            .group_by(Category.name)
            .order_by(average_expr.desc(), Category.name.asc())
        )
        result = await session.execute(stmt)
        return [
            CategoryAverage(category_name=name, average_score=float(average or 0))
            for name, average in result.all()
        ]

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        result = await session.execute(select(func.count(Quiz.id)))
        return int(result.scalar_one() or 0)
