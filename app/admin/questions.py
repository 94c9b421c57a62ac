from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.admin.pagination import normalize_search, resolve_page
from app.admin.types import AdminQuestionPage, AdminQuestionView, QuestionInput
from app.core.errors import ValidationError
from app.db.models.questions import Question
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.game.questions.types import OPTION_LETTERS
from app.game.sessions.errors import CategoryNotFoundError, QuestionNotFoundError

logger = structlog.get_logger(__name__)


def _clean_input(payload: QuestionInput) -> QuestionInput:
    fields = {
        "question_text": payload.question_text,
        "option_a": payload.option_a,
        "option_b": payload.option_b,
        "option_c": payload.option_c,
        "option_d": payload.option_d,
    }
    cleaned = {name: (value or "").strip() for name, value in fields.items()}
    for name, value in cleaned.items():
        if not value:
            raise ValidationError(f"{name} is required.")

    correct_option = (payload.correct_option or "").strip().upper()
    if correct_option not in OPTION_LETTERS:
        raise ValidationError("correct_option must be one of A, B, C or D.")

    return QuestionInput(correct_option=correct_option, category_id=payload.category_id, **cleaned)


def _as_view(question: Question, category_name: str) -> AdminQuestionView:
    return AdminQuestionView(
        id=question.id,
        question_text=question.question_text,
        option_a=question.option_a,
        option_b=question.option_b,
        option_c=question.option_c,
        option_d=question.option_d,
        correct_option=question.correct_option,
        category_id=question.category_id,
        category_name=category_name,
    )


class AdminQuestionsService:
    @staticmethod
    async def list_questions(
        session: AsyncSession,
        *,
        limit: int,
        offset: int,
        search: str | None = None,
        category_id: int | None = None,
    ) -> AdminQuestionPage:
        limit, offset = resolve_page(limit=limit, offset=offset)
        rows, total = await QuestionsRepo.list_page(
            session,
            limit=limit,
            offset=offset,
            search=normalize_search(search),
            category_id=category_id,
        )
        return AdminQuestionPage(
            items=[_as_view(question, category_name) for question, category_name in rows],
            total=total,
            limit=limit,
            offset=offset,
        )

    @staticmethod
    async def create_question(session: AsyncSession, *, payload: QuestionInput) -> AdminQuestionView:
        cleaned = _clean_input(payload)
        category = await CategoriesRepo.get_by_id(session, cleaned.category_id)
        if category is None:
            raise CategoryNotFoundError

        question = await QuestionsRepo.create(
            session,
            question=Question(
                category_id=cleaned.category_id,
                question_text=cleaned.question_text,
                option_a=cleaned.option_a,
                option_b=cleaned.option_b,
                option_c=cleaned.option_c,
                option_d=cleaned.option_d,
                correct_option=cleaned.correct_option,
            ),
        )
        logger.info("admin_question_created", question_id=question.id, category_id=category.id)
        return _as_view(question, category.name)

    @staticmethod
    async def update_question(
        session: AsyncSession,
        *,
        question_id: int,
        payload: QuestionInput,
    ) -> AdminQuestionView:
        cleaned = _clean_input(payload)
        question = await QuestionsRepo.get_by_id(session, question_id)
        if question is None:
            raise QuestionNotFoundError
        category = await CategoriesRepo.get_by_id(session, cleaned.category_id)
        if category is None:
            raise CategoryNotFoundError

        previous_category_id = question.category_id
        question.question_text = cleaned.question_text
        question.option_a = cleaned.option_a
        question.option_b = cleaned.option_b
        question.option_c = cleaned.option_c
        question.option_d = cleaned.option_d
        question.correct_option = cleaned.correct_option
        question.category_id = cleaned.category_id
        await session.flush()

        logger.info(
            "admin_question_updated",
            question_id=question_id,
            previous_category_id=previous_category_id,
            category_id=cleaned.category_id,
        )
        return _as_view(question, category.name)

    @staticmethod
    async def delete_question(session: AsyncSession, *, question_id: int) -> None:
        question = await QuestionsRepo.get_by_id(session, question_id)
        if question is None:
            raise QuestionNotFoundError
        await QuestionsRepo.delete_by_id(session, question_id)
        logger.info(
            "admin_question_deleted",
            question_id=question_id,
            category_id=question.category_id,
        )
