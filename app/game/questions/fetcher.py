from __future__ import annotations

import random

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.questions import Question
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.game.questions.types import QuizQuestion
from app.game.sessions.errors import CategoryNotFoundError, InsufficientQuestionsError

QUESTIONS_PER_QUIZ = 10

logger = structlog.get_logger(__name__)


def to_quiz_question(question: Question) -> QuizQuestion:
    return QuizQuestion(
        question_id=question.id,
        text=question.question_text,
        options=(question.option_a, question.option_b, question.option_c, question.option_d),
        correct_option=question.correct_option.upper(),
        category_id=question.category_id,
    )


async def fetch_unseen_questions(
    session: AsyncSession,
    *,
    user_id: int,
    category_id: int,
    limit: int = QUESTIONS_PER_QUIZ,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    category = await CategoriesRepo.get_by_id(session, category_id)
    if category is None:
        raise CategoryNotFoundError

    remaining = await QuestionsRepo.count_unanswered_for_user(
        session,
        user_id=user_id,
        category_id=category_id,
    )
    if remaining < limit:
        logger.info(
            "quiz_questions_insufficient",
            user_id=user_id,
            category_id=category_id,
            remaining=remaining,
            required=limit,
        )
        raise InsufficientQuestionsError(remaining)

    rows = await QuestionsRepo.list_unanswered_for_user(
        session,
        user_id=user_id,
        category_id=category_id,
        limit=limit,
    )
    questions = [to_quiz_question(row) for row in rows]
    (rng or random).shuffle(questions)
    return questions
