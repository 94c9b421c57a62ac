from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.feedback_repo import FeedbackRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.db.repo.quizzes_repo import QuizzesRepo
from app.db.repo.users_repo import UsersRepo

__all__ = [
    "CategoriesRepo",
    "FeedbackRepo",
    "QuestionsRepo",
    "QuizzesRepo",
    "UsersRepo",
]
