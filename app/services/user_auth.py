from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

import bcrypt
import jwt
from fastapi import Request

from app.core.errors import AuthenticationError

BCRYPT_ROUNDS = 12
BCRYPT_MAX_PASSWORD_BYTES = 72
JWT_ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "


@dataclass(frozen=True, slots=True)
class SessionUser:
    user_id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"


def hash_password(password: str, *, rounds: int = BCRYPT_ROUNDS) -> str:
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_PASSWORD_BYTES or not password_hash:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
    except ValueError:
        return False


def issue_session_token(
    *,
    user_id: int,
    username: str,
    role: str,
    secret: str,
    ttl_seconds: int,
    now_utc: datetime,
) -> str:
    payload = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "iat": int(now_utc.timestamp()),
        "exp": int((now_utc + timedelta(seconds=ttl_seconds)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str, *, secret: str) -> SessionUser:
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM], options={"require": ["sub", "exp"]})
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Session expired, please log in again.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid session.") from exc

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid session.") from exc

    return SessionUser(
        user_id=user_id,
        username=str(payload.get("username") or ""),
        role=str(payload.get("role") or "USER"),
    )


def extract_session_token(request: Request, *, cookie_name: str) -> str | None:
    auth_header = request.headers.get("Authorization") or ""
    if auth_header.startswith(BEARER_PREFIX):
        token = auth_header[len(BEARER_PREFIX) :].strip()
        if token:
            return token

    cookie_token = request.cookies.get(cookie_name)
    if cookie_token:
        return cookie_token.strip() or None
    return None
