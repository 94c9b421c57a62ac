from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_current_user
from app.api.routes.public_models import LoginRequest, RegisterRequest, UserResponse
from app.core.config import get_settings
from app.db.models.users import User
from app.db.session import SessionLocal
from app.services.user_accounts import UserAccountsService
from app.services.user_auth import SessionUser, issue_session_token

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = structlog.get_logger(__name__)


def _as_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        last_login_at=user.last_login_at,
    )


def _set_session_cookie(response: Response, *, user: User, now_utc: datetime) -> None:
    settings = get_settings()
    token = issue_session_token(
        user_id=user.id,
        username=user.username,
        role=user.role,
        secret=settings.jwt_secret,
        ttl_seconds=settings.jwt_ttl_seconds,
        now_utc=now_utc,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.jwt_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.app_env == "prod",
        path="/",
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, response: Response) -> UserResponse:
    now_utc = datetime.now(timezone.utc)
    async with SessionLocal.begin() as session:
        user = await UserAccountsService.register(
            session,
            username=payload.username,
            email=str(payload.email),
            password=payload.password,
            now_utc=now_utc,
        )
        body = _as_response(user)

    _set_session_cookie(response, user=user, now_utc=now_utc)
    return body


@router.post("/login")
async def login(payload: LoginRequest, response: Response) -> UserResponse:
    now_utc = datetime.now(timezone.utc)
    async with SessionLocal.begin() as session:
        user = await UserAccountsService.authenticate(
            session,
            email=str(payload.email),
            password=payload.password,
            now_utc=now_utc,
        )
        body = _as_response(user)

    _set_session_cookie(response, user=user, now_utc=now_utc)
    return body


@router.post("/logout")
async def logout(response: Response) -> dict[str, str]:
    response.delete_cookie(key=get_settings().session_cookie_name, path="/")
    return {"status": "ok"}


@router.get("/me")
async def me(current_user: SessionUser = Depends(get_current_user)) -> UserResponse:
    async with SessionLocal.begin() as session:
        user = await UserAccountsService.get_user(session, user_id=current_user.user_id)
        return _as_response(user)
