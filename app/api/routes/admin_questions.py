from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response, status

from app.admin.questions import AdminQuestionsService
from app.admin.types import ADMIN_PAGE_MAX_LIMIT, QuestionInput
from app.api.deps import require_admin
from app.api.routes.admin_models import (
    AdminQuestionPageResponse,
    AdminQuestionResponse,
    QuestionWriteRequest,
)
from app.db.session import SessionLocal

router = APIRouter(
    prefix="/api/admin/questions",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def _as_input(payload: QuestionWriteRequest) -> QuestionInput:
    return QuestionInput(**payload.model_dump())


@router.get("")
async def list_questions(
    limit: int = Query(default=10, ge=1, le=ADMIN_PAGE_MAX_LIMIT),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, max_length=200),
    category_id: int | None = Query(default=None, gt=0),
) -> AdminQuestionPageResponse:
    async with SessionLocal.begin() as session:
        page = await AdminQuestionsService.list_questions(
            session,
            limit=limit,
            offset=offset,
            search=search,
            category_id=category_id,
        )
    return AdminQuestionPageResponse(**asdict(page))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(payload: QuestionWriteRequest) -> AdminQuestionResponse:
    async with SessionLocal.begin() as session:
        view = await AdminQuestionsService.create_question(session, payload=_as_input(payload))
    return AdminQuestionResponse(**asdict(view))


@router.put("/{question_id}")
async def update_question(question_id: int, payload: QuestionWriteRequest) -> AdminQuestionResponse:
    async with SessionLocal.begin() as session:
        view = await AdminQuestionsService.update_question(
            session,
            question_id=question_id,
            payload=_as_input(payload),
        )
    return AdminQuestionResponse(**asdict(view))


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(question_id: int) -> Response:
    async with SessionLocal.begin() as session:
        await AdminQuestionsService.delete_question(session, question_id=question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
