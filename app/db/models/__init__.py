from app.db.models.categories import Category
from app.db.models.feedback import Feedback
from app.db.models.question_interactions import QuestionInteraction
from app.db.models.questions import Question
from app.db.models.quizzes import Quiz
from app.db.models.users import User

__all__ = [
    "Category",
    "Feedback",
    "Question",
    "QuestionInteraction",
    "Quiz",
    "User",
]
