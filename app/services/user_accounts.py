from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.db.models.users import User
from app.db.repo.users_repo import UsersRepo
from app.services.user_auth import hash_password, verify_password

logger = structlog.get_logger(__name__)

USERNAME_MIN_LENGTH = 3


class UserAccountsService:
    @staticmethod
    async def register(
        session: AsyncSession,
        *,
        username: str,
        email: str,
        password: str,
        now_utc: datetime,
    ) -> User:
        username = username.strip()
        if len(username) < USERNAME_MIN_LENGTH:
            raise ValidationError(f"Username must be at least {USERNAME_MIN_LENGTH} characters.")
        if await UsersRepo.get_by_email(session, email) is not None:
            raise ConflictError("This email address is already in use.")
        if await UsersRepo.get_by_username(session, username) is not None:
            raise ConflictError("This username is already taken.")

        try:
            user = await UsersRepo.create(
                session,
                username=username,
                email=email,
                password_hash=hash_password(password),
                now_utc=now_utc,
            )
        except IntegrityError as exc:
            raise ConflictError("This email address or username is already in use.") from exc

        logger.info("user_registered", user_id=user.id, username=user.username)
        return user

    @staticmethod
    async def authenticate(
        session: AsyncSession,
        *,
        email: str,
        password: str,
        now_utc: datetime,
    ) -> User:
        user = await UsersRepo.get_by_email(session, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("user_login_failed", reason="invalid_credentials")
            raise AuthenticationError("Invalid email or password.")

        await UsersRepo.touch_last_login(session, user.id, now_utc)
        user.last_login_at = now_utc
        logger.info("user_logged_in", user_id=user.id)
        return user

    @staticmethod
    async def get_user(session: AsyncSession, *, user_id: int) -> User:
        user = await UsersRepo.get_by_id(session, user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user
