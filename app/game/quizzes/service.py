from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.db.models.question_interactions import QuestionInteraction
from app.db.models.quizzes import Quiz
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.db.repo.quizzes_repo import QuizHistoryRow, QuizzesRepo
from app.db.repo.users_repo import UsersRepo
from app.game.questions.types import OPTION_LETTERS
from app.game.quizzes.types import UserProfileStats
from app.game.scoring import score
from app.game.sessions.errors import (
    CategoryNotFoundError,
    InvalidSubmissionError,
    QuestionNotFoundError,
    QuizNotFoundError,
)
from app.game.sessions.types import (
    QuizResultQuestionView,
    QuizResultView,
    QuizSubmission,
)

logger = structlog.get_logger(__name__)


def _validate_submission_shape(submission: QuizSubmission) -> None:
    total = submission.total_questions
    if total <= 0 or not submission.answers:
        raise InvalidSubmissionError("Quiz submission has no answers.")
    if len(submission.answers) != total:
        raise InvalidSubmissionError("Answer count does not match total questions.")
    if submission.correct_answers + submission.incorrect_answers != total:
        raise InvalidSubmissionError("Correct and incorrect counts do not add up to total.")
    question_ids = [answer.question_id for answer in submission.answers]
    if len(set(question_ids)) != len(question_ids):
        raise InvalidSubmissionError("Quiz submission repeats a question.")
    for answer in submission.answers:
        if answer.user_answer.upper() not in OPTION_LETTERS:
            raise InvalidSubmissionError(f"Invalid answer for question {answer.question_id}.")


class QuizResultsService:
    @staticmethod
    async def finish_quiz(
        session: AsyncSession,
        *,
        user_id: int,
        submission: QuizSubmission,
        now_utc: datetime,
    ) -> int:
        _validate_submission_shape(submission)

        category = await CategoriesRepo.get_by_id(session, submission.category_id)
        if category is None:
            raise CategoryNotFoundError

        question_ids = [answer.question_id for answer in submission.answers]
        stored = {
            question.id: question
            for question in await QuestionsRepo.list_by_ids(session, question_ids=question_ids)
        }
        missing = [question_id for question_id in question_ids if question_id not in stored]
        if missing:
            raise QuestionNotFoundError(f"Question {missing[0]} not found.")

        interactions: list[QuestionInteraction] = []
        correct = 0
        for answer in submission.answers:
            question = stored[answer.question_id]
            if question.category_id != submission.category_id:
                raise InvalidSubmissionError(
                    f"Question {question.id} does not belong to category {submission.category_id}."
                )
            user_answer = answer.user_answer.upper()
            is_correct = question.correct_option.upper() == user_answer
            if is_correct != answer.is_correct:
                raise InvalidSubmissionError(f"Correctness mismatch for question {question.id}.")
            correct += int(is_correct)
            interactions.append(
                QuestionInteraction(
                    user_id=user_id,
                    question_id=question.id,
                    user_answer=user_answer,
                    is_correct=is_correct,
                    answered_at=now_utc,
                )
            )

        total = submission.total_questions
        expected_score = score(correct, total)
        if correct != submission.correct_answers or expected_score != submission.score:
            raise InvalidSubmissionError("Submitted score does not match the answers.")

        quiz = await QuizzesRepo.create(
            session,
            quiz=Quiz(
                user_id=user_id,
                category_id=submission.category_id,
                total_questions=total,
                correct_answers=correct,
                incorrect_answers=total - correct,
                score=expected_score,
                played_at=now_utc,
                interactions=interactions,
            ),
        )
        await UsersRepo.apply_quiz_stats(
            session,
            user_id=user_id,
            total_questions=total,
            correct_answers=correct,
            score=expected_score,
        )
        logger.info(
            "quiz_finished",
            quiz_id=quiz.id,
            user_id=user_id,
            category_id=submission.category_id,
            score=expected_score,
            correct_answers=correct,
            total_questions=total,
        )
        return quiz.id

    @staticmethod
    async def get_quiz_result(
        session: AsyncSession,
        *,
        quiz_id: int,
        user_id: int,
    ) -> QuizResultView:
        quiz = await QuizzesRepo.get_with_interactions(session, quiz_id)
        if quiz is None or quiz.user_id != user_id:
            raise QuizNotFoundError

        category = await CategoriesRepo.get_by_id(session, quiz.category_id)
        questions = {
            question.id: question
            for question in await QuestionsRepo.list_by_ids(
                session,
                question_ids=[interaction.question_id for interaction in quiz.interactions],
            )
        }

        views: list[QuizResultQuestionView] = []
        for interaction in quiz.interactions:
            question = questions.get(interaction.question_id)
            if question is None:
                continue
            views.append(
                QuizResultQuestionView(
                    question_id=question.id,
                    question=question.question_text,
                    options={letter: question.option_text(letter) for letter in OPTION_LETTERS},
                    user_answer=interaction.user_answer,
                    correct_answer=question.correct_option,
                    is_correct=interaction.is_correct,
                )
            )

        return QuizResultView(
            quiz_id=quiz.id,
            category_id=quiz.category_id,
            category_name=category.name if category is not None else "",
            total_questions=quiz.total_questions,
            correct_answers=quiz.correct_answers,
            incorrect_answers=quiz.incorrect_answers,
            score=quiz.score,
            played_at=quiz.played_at,
            questions=views,
        )

    @staticmethod
    async def list_history(
        session: AsyncSession,
        *,
        user_id: int,
        limit: int = 10,
    ) -> list[QuizHistoryRow]:
        return await QuizzesRepo.list_history_for_user(session, user_id=user_id, limit=limit)

    @staticmethod
    async def get_profile(session: AsyncSession, *, user_id: int) -> UserProfileStats:
        user = await UsersRepo.get_by_id(session, user_id)
        if user is None:
            raise NotFoundError("User not found.")

        averages = await QuizzesRepo.list_category_averages_for_user(session, user_id=user_id)
        average_score = (
            score(user.total_correct_answers, user.total_questions_attempted)
            if user.total_questions_attempted > 0
            else 0
        )
        return UserProfileStats(
            user_id=user.id,
            username=user.username,
            email=user.email,
            total_play_count=user.total_play_count,
            total_score=user.total_score,
            total_correct_answers=user.total_correct_answers,
            total_questions_attempted=user.total_questions_attempted,
            average_score=average_score,
            best_category=averages[0].category_name if averages else None,
            worst_category=averages[-1].category_name if averages else None,
            created_at=user.created_at,
        )
