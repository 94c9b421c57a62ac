from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user
from app.api.routes.public_models import (
    FinishQuizRequest,
    FinishQuizResponse,
    QuizQuestionResponse,
    QuizResultQuestionResponse,
    QuizResultResponse,
    StartQuizRequest,
    StartQuizResponse,
)
from app.core.config import get_settings
from app.db.session import SessionLocal
from app.game.questions.fetcher import fetch_unseen_questions
from app.game.questions.types import QuizQuestion
from app.game.quizzes.service import QuizResultsService
from app.game.sessions.types import QuizSubmission, RecordedAnswer
from app.services.user_auth import SessionUser

router = APIRouter(prefix="/api", tags=["quiz"])


def _as_question_response(question: QuizQuestion) -> QuizQuestionResponse:
    option_a, option_b, option_c, option_d = question.options
    return QuizQuestionResponse(
        id=question.question_id,
        category_id=question.category_id,
        question_text=question.text,
        option_a=option_a,
        option_b=option_b,
        option_c=option_c,
        option_d=option_d,
        correct_option=question.correct_option,
    )


def _as_submission(payload: FinishQuizRequest) -> QuizSubmission:
    return QuizSubmission(
        category_id=payload.category_id,
        total_questions=payload.total_questions,
        correct_answers=payload.correct_answers,
        incorrect_answers=payload.incorrect_answers,
        score=payload.score,
        answers=[
            RecordedAnswer(
                question_id=item.question_id,
                user_answer=item.user_answer,
                is_correct=item.is_correct,
            )
            for item in payload.interactions
        ],
    )


@router.post("/questions/start")
async def start_quiz(
    payload: StartQuizRequest,
    current_user: SessionUser = Depends(get_current_user),
) -> StartQuizResponse:
    async with SessionLocal.begin() as session:
        questions = await fetch_unseen_questions(
            session,
            user_id=current_user.user_id,
            category_id=payload.category_id,
            limit=get_settings().questions_per_quiz,
        )
    return StartQuizResponse(
        category_id=payload.category_id,
        questions=[_as_question_response(question) for question in questions],
    )


@router.post("/quizzes", status_code=status.HTTP_201_CREATED)
async def finish_quiz(
    payload: FinishQuizRequest,
    current_user: SessionUser = Depends(get_current_user),
) -> FinishQuizResponse:
    now_utc = datetime.now(timezone.utc)
    async with SessionLocal.begin() as session:
        quiz_id = await QuizResultsService.finish_quiz(
            session,
            user_id=current_user.user_id,
            submission=_as_submission(payload),
            now_utc=now_utc,
        )
    return FinishQuizResponse(quiz_id=quiz_id)


@router.get("/quizzes/{quiz_id}")
async def get_quiz_result(
    quiz_id: int,
    current_user: SessionUser = Depends(get_current_user),
) -> QuizResultResponse:
    async with SessionLocal.begin() as session:
        result = await QuizResultsService.get_quiz_result(
            session,
            quiz_id=quiz_id,
            user_id=current_user.user_id,
        )
    return QuizResultResponse(
        quiz_id=result.quiz_id,
        category_id=result.category_id,
        category_name=result.category_name,
        total_questions=result.total_questions,
        correct_answers=result.correct_answers,
        incorrect_answers=result.incorrect_answers,
        score=result.score,
        played_at=result.played_at,
        questions=[
            QuizResultQuestionResponse(
                question_id=item.question_id,
                question=item.question,
                options=item.options,
                user_answer=item.user_answer,
                correct_answer=item.correct_answer,
                is_correct=item.is_correct,
            )
            for item in result.questions
        ],
    )
