from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response, status

from app.admin.types import ADMIN_PAGE_MAX_LIMIT
from app.admin.users import AdminUsersService
from app.api.deps import require_admin
from app.api.routes.admin_models import AdminUserPageResponse, AdminUserResponse, UserRoleRequest
from app.db.session import SessionLocal
from app.services.user_auth import SessionUser

router = APIRouter(prefix="/api/admin/users", tags=["admin"])


@router.get("")
async def list_users(
    limit: int = Query(default=10, ge=1, le=ADMIN_PAGE_MAX_LIMIT),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, max_length=200),
    admin: SessionUser = Depends(require_admin),
) -> AdminUserPageResponse:
    async with SessionLocal.begin() as session:
        page = await AdminUsersService.list_users(session, limit=limit, offset=offset, search=search)
    return AdminUserPageResponse(**asdict(page))


@router.put("/{user_id}")
async def update_user_role(
    user_id: int,
    payload: UserRoleRequest,
    admin: SessionUser = Depends(require_admin),
) -> AdminUserResponse:
    async with SessionLocal.begin() as session:
        view = await AdminUsersService.set_role(
            session,
            actor_user_id=admin.user_id,
            user_id=user_id,
            role=payload.role,
        )
    return AdminUserResponse(**asdict(view))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, admin: SessionUser = Depends(require_admin)) -> Response:
    async with SessionLocal.begin() as session:
        await AdminUsersService.delete_user(session, actor_user_id=admin.user_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
