from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from app.admin.categories import AdminCategoriesService
from app.api.deps import require_admin
from app.api.routes.admin_models import AdminCategoryResponse, CategoryWriteRequest
from app.db.repo.categories_repo import CategoryWithCount
from app.db.session import SessionLocal

router = APIRouter(
    prefix="/api/admin/categories",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def _as_response(row: CategoryWithCount) -> AdminCategoryResponse:
    return AdminCategoryResponse(id=row.id, name=row.name, question_count=row.question_count)


@router.get("")
async def list_categories() -> list[AdminCategoryResponse]:
    async with SessionLocal.begin() as session:
        rows = await AdminCategoriesService.list_categories(session)
    return [_as_response(row) for row in rows]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryWriteRequest) -> AdminCategoryResponse:
    async with SessionLocal.begin() as session:
        row = await AdminCategoriesService.create_category(session, name=payload.name)
    return _as_response(row)


@router.put("/{category_id}")
async def update_category(category_id: int, payload: CategoryWriteRequest) -> AdminCategoryResponse:
    async with SessionLocal.begin() as session:
        row = await AdminCategoriesService.update_category(
            session,
            category_id=category_id,
            name=payload.name,
        )
    return _as_response(row)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int) -> Response:
    async with SessionLocal.begin() as session:
        await AdminCategoriesService.delete_category(session, category_id=category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
