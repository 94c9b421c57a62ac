from __future__ import annotations

from fastapi import APIRouter

from app.api.routes.public_models import CategoryResponse
from app.db.repo.categories_repo import CategoriesRepo
from app.db.session import SessionLocal
from app.game.sessions.errors import CategoryNotFoundError

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
async def list_categories() -> list[CategoryResponse]:
    async with SessionLocal.begin() as session:
        rows = await CategoriesRepo.list_with_question_counts(session)
    return [CategoryResponse(id=row.id, name=row.name, question_count=row.question_count) for row in rows]


@router.get("/{category_id}")
async def get_category(category_id: int) -> CategoryResponse:
    async with SessionLocal.begin() as session:
        category = await CategoriesRepo.get_by_id(session, category_id)
        if category is None:
            raise CategoryNotFoundError
        question_count = await CategoriesRepo.count_questions(session, category_id)
        return CategoryResponse(id=category.id, name=category.name, question_count=question_count)
