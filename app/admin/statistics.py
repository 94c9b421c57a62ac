from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.admin.types import AdminStatistics
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.feedback_repo import FeedbackRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.db.repo.quizzes_repo import QuizzesRepo
from app.db.repo.users_repo import UsersRepo


async def collect_statistics(session: AsyncSession) -> AdminStatistics:
    return AdminStatistics(
        total_users=await UsersRepo.count_all(session),
        total_categories=await CategoriesRepo.count_all(session),
        total_questions=await QuestionsRepo.count_all(session),
        total_quizzes=await QuizzesRepo.count_all(session),
        total_feedback=await FeedbackRepo.count_all(session),
    )
