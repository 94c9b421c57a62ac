from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from app.admin.statistics import collect_statistics
from app.admin.types import ADMIN_PAGE_MAX_LIMIT
from app.api.deps import require_admin
from app.api.routes.admin_models import (
    AdminFeedbackPageResponse,
    AdminFeedbackResponse,
    AdminStatisticsResponse,
)
from app.db.session import SessionLocal
from app.services.feedback import FeedbackService

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/feedback")
async def list_feedback(
    limit: int = Query(default=10, ge=1, le=ADMIN_PAGE_MAX_LIMIT),
    offset: int = Query(default=0, ge=0),
) -> AdminFeedbackPageResponse:
    async with SessionLocal.begin() as session:
        rows, total = await FeedbackService.list_page(session, limit=limit, offset=offset)
    return AdminFeedbackPageResponse(
        items=[
            AdminFeedbackResponse(
                id=row.id,
                name=row.name,
                email=row.email,
                message=row.message,
                created_at=row.created_at,
            )
            for row in rows
        ],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/statistics")
async def get_statistics() -> AdminStatisticsResponse:
    async with SessionLocal.begin() as session:
        stats = await collect_statistics(session)
    return AdminStatisticsResponse(**asdict(stats))
