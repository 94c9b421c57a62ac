from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from app.ai import service as ai_service
from app.api.deps import get_current_user
from app.api.routes.public_models import GenerateQuestionsRequest, GenerateQuestionsResponse
from app.core.errors import ValidationError
from app.services.user_auth import SessionUser

router = APIRouter(prefix="/api/ai", tags=["ai"])
logger = structlog.get_logger(__name__)


@router.post("/questions")
async def generate_questions(
    payload: GenerateQuestionsRequest,
    current_user: SessionUser = Depends(get_current_user),
) -> GenerateQuestionsResponse:
    if (payload.category_id is None) == (payload.topic is None):
        raise ValidationError("Provide either category_id or topic.")

    generator = ai_service.get_question_generator()
    logger.info(
        "ai_questions_requested",
        user_id=current_user.user_id,
        category_id=payload.category_id,
        mode="AI" if payload.category_id is not None else "AI+",
    )
    if payload.category_id is not None:
        topic, questions = await ai_service.generate_for_category(generator, category_id=payload.category_id)
    else:
        topic, questions = await ai_service.generate_for_topic(generator, topic=payload.topic or "")

    return GenerateQuestionsResponse(
        topic=topic,
        questions=[question.model_dump() for question in questions],
    )
