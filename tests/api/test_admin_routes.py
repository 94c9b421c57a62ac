from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.admin.types import AdminQuestionPage, AdminQuestionView, AdminStatistics
from app.api.routes import admin_categories as admin_categories_routes
from app.api.routes import admin_feedback as admin_feedback_routes
from app.api.routes import admin_questions as admin_questions_routes
from app.api.routes import admin_users as admin_users_routes
from app.core.errors import ConflictError, ValidationError
from app.db.repo.categories_repo import CategoryWithCount
from app.main import app
from tests.api.helpers import DummySessionLocal, auth_headers, session_token, store_user

NOW_UTC = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/admin/categories"),
        ("get", "/api/admin/questions"),
        ("get", "/api/admin/users"),
        ("get", "/api/admin/feedback"),
        ("get", "/api/admin/statistics"),
        ("delete", "/api/admin/categories/1"),
        ("delete", "/api/admin/users/2"),
    ],
)
def test_admin_routes_reject_regular_users(method: str, path: str) -> None:
    client = TestClient(app)

    anonymous = getattr(client, method)(path)
    regular = getattr(client, method)(path, headers=auth_headers(role="USER"))

    assert anonymous.status_code == 401
    assert regular.status_code == 403
    assert regular.json()["detail"]["code"] == "E_FORBIDDEN"


def test_admin_lists_categories_with_question_counts(monkeypatch) -> None:
    async def fake_list(session):  # noqa: ANN001
        del session
        return [CategoryWithCount(id=1, name="History", question_count=12)]

    monkeypatch.setattr(admin_categories_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(admin_categories_routes.AdminCategoriesService, "list_categories", fake_list)

    client = TestClient(app)
    response = client.get("/api/admin/categories", headers=auth_headers(role="ADMIN"))

    assert response.status_code == 200
    assert response.json() == [{"id": 1, "name": "History", "question_count": 12}]


def test_admin_create_category_conflict(monkeypatch) -> None:
    async def fake_create(session, *, name):  # noqa: ANN001
        del session
        raise ConflictError(f"Category '{name}' already exists.")

    monkeypatch.setattr(admin_categories_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(admin_categories_routes.AdminCategoriesService, "create_category", fake_create)

    client = TestClient(app)
    response = client.post("/api/admin/categories", json={"name": "History"}, headers=auth_headers(role="ADMIN"))

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "E_CONFLICT"


def test_admin_lists_questions_with_filters(monkeypatch) -> None:
    captured: dict[str, object] = {}

    async def fake_list(session, **kwargs):  # noqa: ANN001
        del session
        captured.update(kwargs)
        return AdminQuestionPage(
            items=[
                AdminQuestionView(
                    id=9,
                    question_text="Capital of Peru?",
                    option_a="Lima",
                    option_b="Quito",
                    option_c="Bogota",
                    option_d="La Paz",
                    correct_option="A",
                    category_id=2,
                    category_name="Geography",
                )
            ],
            total=31,
            limit=kwargs["limit"],
            offset=kwargs["offset"],
        )

    monkeypatch.setattr(admin_questions_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(admin_questions_routes.AdminQuestionsService, "list_questions", fake_list)

    client = TestClient(app)
    response = client.get(
        "/api/admin/questions",
        params={"limit": 5, "offset": 10, "search": "peru", "category_id": 2},
        headers=auth_headers(role="ADMIN"),
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 31
    assert payload["items"][0]["category_name"] == "Geography"
    assert captured == {"limit": 5, "offset": 10, "search": "peru", "category_id": 2}


def test_admin_questions_rejects_oversized_page() -> None:
    client = TestClient(app)
    response = client.get("/api/admin/questions", params={"limit": 500}, headers=auth_headers(role="ADMIN"))

    assert response.status_code == 422


def test_admin_cannot_delete_self(monkeypatch) -> None:
    async def fake_delete(session, *, actor_user_id, user_id):  # noqa: ANN001
        del session
        assert actor_user_id == user_id == 1
        raise ValidationError("You cannot delete your own account.")

    monkeypatch.setattr(admin_users_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(admin_users_routes.AdminUsersService, "delete_user", fake_delete)

    client = TestClient(app)
    response = client.delete("/api/admin/users/1", headers=auth_headers(user_id=1, role="ADMIN"))

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "You cannot delete your own account."


def test_admin_statistics(monkeypatch) -> None:
    async def fake_collect(session):  # noqa: ANN001
        del session
        return AdminStatistics(
            total_users=4,
            total_categories=3,
            total_questions=120,
            total_quizzes=17,
            total_feedback=2,
        )

    monkeypatch.setattr(admin_feedback_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(admin_feedback_routes, "collect_statistics", fake_collect)

    client = TestClient(app)
    response = client.get("/api/admin/statistics", headers=auth_headers(role="ADMIN"))

    assert response.status_code == 200
    assert response.json()["total_questions"] == 120


def test_database_errors_use_internal_error_envelope(monkeypatch) -> None:
    async def fake_collect(session):  # noqa: ANN001
        del session
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(admin_feedback_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(admin_feedback_routes, "collect_statistics", fake_collect)

    client = TestClient(app)
    response = client.get("/api/admin/statistics", headers=auth_headers(role="ADMIN"))

    assert response.status_code == 500
    assert response.json() == {
        "detail": {"code": "E_INTERNAL", "message": "Unexpected error, please try again."}
    }


def test_unhandled_errors_use_internal_error_envelope(monkeypatch) -> None:
    async def fake_collect(session):  # noqa: ANN001
        del session
        raise RuntimeError("boom")

    monkeypatch.setattr(admin_feedback_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(admin_feedback_routes, "collect_statistics", fake_collect)

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get("/api/admin/statistics", headers=auth_headers(role="ADMIN"))

    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "E_INTERNAL"


def test_admin_access_follows_stored_role_not_token_claim() -> None:
    store_user(user_id=5, role="USER")
    token = session_token(user_id=5, role="ADMIN")

    client = TestClient(app)
    response = client.get("/api/admin/statistics", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "E_FORBIDDEN"


def test_deleted_account_token_is_rejected() -> None:
    token = session_token(user_id=77, role="ADMIN")

    client = TestClient(app)
    admin_response = client.get("/api/admin/statistics", headers={"Authorization": f"Bearer {token}"})
    quiz_response = client.post(
        "/api/quizzes",
        json={
            "category_id": 3,
            "total_questions": 1,
            "correct_answers": 1,
            "incorrect_answers": 0,
            "score": 100,
            "interactions": [{"question_id": 1, "user_answer": "A", "is_correct": True}],
        },
        headers={"Authorization": f"Bearer {token}"},
    )

    assert admin_response.status_code == 401
    assert quiz_response.status_code == 401
    assert quiz_response.json()["detail"]["message"] == "Account no longer exists."
