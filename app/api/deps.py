from __future__ import annotations

from fastapi import Depends, Request

from app.core.config import get_settings
from app.core.errors import AuthenticationError, ForbiddenError
from app.db.repo.users_repo import UsersRepo
from app.db.session import SessionLocal
from app.services.user_auth import SessionUser, decode_session_token, extract_session_token


async def get_current_user(request: Request) -> SessionUser:
    """Resolve the session token, then trust only the stored account for identity and role."""
    settings = get_settings()
    token = extract_session_token(request, cookie_name=settings.session_cookie_name)
    if token is None:
        raise AuthenticationError
    claims = decode_session_token(token, secret=settings.jwt_secret)

    async with SessionLocal.begin() as session:
        user = await UsersRepo.get_by_id(session, claims.user_id)
    if user is None:
        raise AuthenticationError("Account no longer exists.")
    return SessionUser(user_id=user.id, username=user.username, role=user.role)


def require_admin(user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if not user.is_admin:
        raise ForbiddenError
    return user
