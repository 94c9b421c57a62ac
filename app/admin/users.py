from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin.pagination import normalize_search, resolve_page
from app.admin.types import USER_ROLES, AdminUserPage, AdminUserView
from app.core.errors import NotFoundError, ValidationError
from app.db.models.users import User
from app.db.repo.users_repo import UsersRepo

logger = structlog.get_logger(__name__)


def _as_view(user: User) -> AdminUserView:
    return AdminUserView(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        total_play_count=user.total_play_count,
        total_score=user.total_score,
        created_at=user.created_at,
        last_login_at=user.last_login_at,
    )


class AdminUsersService:
    @staticmethod
    async def list_users(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
        search: str | None = None,
    ) -> AdminUserPage:
        limit, offset = resolve_page(limit=limit, offset=offset)
        users, total = await UsersRepo.list_page(
            session,
            limit=limit,
            offset=offset,
            search=normalize_search(search),
        )
        return AdminUserPage(
            items=[_as_view(user) for user in users],
            total=total,
            limit=limit,
            offset=offset,
        )

    @staticmethod
    async def set_role(
        session: AsyncSession,
        *,
        actor_user_id: int,
        user_id: int,
        role: str,
    ) -> AdminUserView:
        normalized = (role or "").strip().upper()
        if normalized not in USER_ROLES:
            raise ValidationError("role must be USER or ADMIN.")
        if user_id == actor_user_id and normalized != "ADMIN":
            raise ValidationError("You cannot remove your own admin role.")

        user = await UsersRepo.set_role(session, user_id=user_id, role=normalized)
        if user is None:
            raise NotFoundError("User not found.")
        logger.info("admin_user_role_changed", actor_user_id=actor_user_id, user_id=user_id, role=normalized)
        return _as_view(user)

    @staticmethod
    async def delete_user(session: AsyncSession, *, actor_user_id: int, user_id: int) -> None:
        if user_id == actor_user_id:
            raise ValidationError("You cannot delete your own account.")
        deleted = await UsersRepo.delete_by_id(session, user_id)
        if not deleted:
            raise NotFoundError("User not found.")
        logger.info("admin_user_deleted", actor_user_id=actor_user_id, user_id=user_id)
