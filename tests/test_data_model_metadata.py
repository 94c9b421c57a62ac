from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from app.db.models import (  # noqa: F401
    Category,
    Feedback,
    Question,
    QuestionInteraction,
    Quiz,
    User,
)
from app.db.models.base import Base


def _check_names(table_name: str) -> set[str]:
    table = Base.metadata.tables[table_name]
    return {constraint.name for constraint in table.constraints if isinstance(constraint, CheckConstraint)}


def test_all_quiz_tables_registered() -> None:
    expected_tables = {
        "users",
        "categories",
        "questions",
        "quizzes",
        "question_interactions",
        "feedback",
    }
    assert expected_tables.issubset(set(Base.metadata.tables))


def test_critical_constraints_present() -> None:
    assert "ck_questions_correct_option" in _check_names("questions")
    assert "ck_question_interactions_user_answer" in _check_names("question_interactions")
    assert {"ck_quizzes_score_range", "ck_quizzes_counts_consistent"} <= _check_names("quizzes")
    assert "ck_users_role" in _check_names("users")

    users = Base.metadata.tables["users"]
    user_unique_constraints = {
        constraint.name for constraint in users.constraints if isinstance(constraint, UniqueConstraint)
    }
    assert {"uq_users_username", "uq_users_email"} <= user_unique_constraints

    interactions = Base.metadata.tables["question_interactions"]
    assert "idx_interactions_user_question" in {index.name for index in interactions.indexes}
    assert interactions.c.quiz_id.nullable is True


def test_deleting_category_cascades_to_questions() -> None:
    questions = Base.metadata.tables["questions"]
    (foreign_key,) = questions.c.category_id.foreign_keys

    assert foreign_key.column.table.name == "categories"
    assert foreign_key.ondelete == "CASCADE"
