from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

from app.core.config import get_settings
from app.services.user_auth import issue_session_token

STORED_USERS: dict[int, SimpleNamespace] = {}


class DummySessionBegin:
    async def __aenter__(self) -> object:
        return object()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class DummySessionLocal:
    def begin(self) -> DummySessionBegin:
        return DummySessionBegin()


class StoredUsersRepo:
    @staticmethod
    async def get_by_id(session, user_id):  # noqa: ANN001
        del session
        return STORED_USERS.get(user_id)


def store_user(*, user_id: int, username: str = "ada", role: str = "USER") -> None:
    STORED_USERS[user_id] = SimpleNamespace(id=user_id, username=username, role=role)


def session_token(*, user_id: int = 8, username: str = "ada", role: str = "USER") -> str:
    return issue_session_token(
        user_id=user_id,
        username=username,
        role=role,
        secret=get_settings().jwt_secret,
        ttl_seconds=3600,
        now_utc=datetime.now(timezone.utc),
    )


def auth_headers(*, user_id: int = 8, username: str = "ada", role: str = "USER") -> dict[str, str]:
    store_user(user_id=user_id, username=username, role=role)
    return {"Authorization": f"Bearer {session_token(user_id=user_id, username=username, role=role)}"}
