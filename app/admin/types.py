from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

USER_ROLES = ("USER", "ADMIN")
ADMIN_PAGE_MAX_LIMIT = 100


@dataclass(slots=True)
class QuestionInput:
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_option: str
    category_id: int


@dataclass(slots=True)
class AdminQuestionView:
    id: int
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_option: str
    category_id: int
    category_name: str


@dataclass(slots=True)
class AdminQuestionPage:
    items: list[AdminQuestionView]
    total: int
    limit: int
    offset: int


@dataclass(slots=True)
class AdminUserView:
    id: int
    username: str
    email: str
    role: str
    total_play_count: int
    total_score: int
    created_at: datetime
    last_login_at: datetime | None


@dataclass(slots=True)
class AdminUserPage:
    items: list[AdminUserView]
    total: int
    limit: int
    offset: int


@dataclass(slots=True)
class AdminStatistics:
    total_users: int
    total_categories: int
    total_questions: int
    total_quizzes: int
    total_feedback: int
