from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.users import User

LEADERBOARD_MAX_ROWS = 100


class UsersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    @staticmethod
    async def get_by_email(session: AsyncSession, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_username(session: AsyncSession, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        username: str,
        email: str,
        password_hash: str,
        now_utc: datetime,
        role: str = "USER",
    ) -> User:
        user = User(
            username=username,
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
            total_play_count=0,
            total_questions_attempted=0,
            total_correct_answers=0,
            total_score=0,
            created_at=now_utc,
            last_login_at=now_utc,
        )
        session.add(user)
        await session.flush()
        return user

    @staticmethod
    async def touch_last_login(session: AsyncSession, user_id: int, login_at: datetime) -> int:
        stmt = update(User).where(User.id == user_id).values(last_login_at=login_at)
        result = await session.execute(stmt)
        return result.rowcount or 0

    @staticmethod
    async def apply_quiz_stats(
        session: AsyncSession,
        *,
        user_id: int,
        total_questions: int,
        correct_answers: int,
        score: int,
    ) -> int:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                total_play_count=User.total_play_count + 1,
                total_questions_attempted=User.total_questions_attempted + total_questions,
                total_correct_answers=User.total_correct_answers + correct_answers,
                total_score=User.total_score + score,
            )
        )
        result = await session.execute(stmt)
        return result.rowcount or 0

    @staticmethod
    async def list_leaderboard(
        session: AsyncSession,
        *,
        limit: int = LEADERBOARD_MAX_ROWS,
    ) -> list[User]:
        stmt = (
            select(User)
            .where(User.total_play_count > 0)
            .order_by(User.total_score.desc(), User.id.asc())
            .limit(max(1, min(LEADERBOARD_MAX_ROWS, int(limit))))
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
    ) -> tuple[list[User], int]:
        stmt = select(User)
        count_stmt = select(func.count(User.id))
        if search:
            pattern = f"%{search}%"
            condition = or_(
                User.username.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
            )
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)
        stmt = stmt.order_by(User.created_at.desc(), User.id.desc()).limit(limit).offset(offset)
        rows = await session.execute(stmt)
        total = await session.execute(count_stmt)
        return list(rows.scalars().all()), int(total.scalar_one() or 0)

    @staticmethod
    async def set_role(session: AsyncSession, *, user_id: int, role: str) -> User | None:
        user = await session.get(User, user_id)
        if user is None:
            return None
        user.role = role
        await session.flush()
        return user

    @staticmethod
    async def delete_by_id(session: AsyncSession, user_id: int) -> int:
        result = await session.execute(delete(User).where(User.id == user_id))
        return result.rowcount or 0

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        result = await session.execute(select(func.count(User.id)))
        return int(result.scalar_one() or 0)
