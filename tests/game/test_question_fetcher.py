from __future__ import annotations

import random
from types import SimpleNamespace

import pytest

from app.game.questions import fetcher
from app.game.sessions.errors import CategoryNotFoundError, InsufficientQuestionsError


def _stored_question(question_id: int) -> SimpleNamespace:
    return SimpleNamespace(
        id=question_id,
        category_id=3,
        question_text=f"Question {question_id}?",
        option_a=f"a{question_id}",
        option_b=f"b{question_id}",
        option_c=f"c{question_id}",
        option_d=f"d{question_id}",
        correct_option="c",
    )


def _patch_repos(monkeypatch: pytest.MonkeyPatch, *, unseen: int, category_exists: bool = True) -> dict:
    calls: dict[str, object] = {}

    async def fake_get_category(session, category_id):  # noqa: ANN001
        del session
        calls["category_id"] = category_id
        return SimpleNamespace(id=category_id, name="Science") if category_exists else None

    async def fake_count_unanswered(session, *, user_id, category_id):  # noqa: ANN001
        del session, category_id
        calls["count_user_id"] = user_id
        return unseen

    async def fake_list_unanswered(session, *, user_id, category_id, limit):  # noqa: ANN001
        del session, user_id, category_id
        calls["limit"] = limit
        return [_stored_question(question_id) for question_id in range(1, min(unseen, limit) + 1)]

    monkeypatch.setattr(fetcher.CategoriesRepo, "get_by_id", fake_get_category)
    monkeypatch.setattr(fetcher.QuestionsRepo, "count_unanswered_for_user", fake_count_unanswered)
    monkeypatch.setattr(fetcher.QuestionsRepo, "list_unanswered_for_user", fake_list_unanswered)
    return calls


@pytest.mark.asyncio
async def test_fetch_unseen_questions_returns_ten_of_fifteen(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _patch_repos(monkeypatch, unseen=15)

    questions = await fetcher.fetch_unseen_questions(
        object(),
        user_id=5,
        category_id=3,
        rng=random.Random(1),
    )

    assert len(questions) == 10
    assert calls["limit"] == 10
    assert calls["count_user_id"] == 5
    assert sorted(question.question_id for question in questions) == list(range(1, 11))
    for question in questions:
        assert len(set(question.options)) == 4
        assert question.correct_option == "C"
        assert question.category_id == 3


@pytest.mark.asyncio
async def test_fetch_unseen_questions_reports_remaining_count(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_repos(monkeypatch, unseen=9)

    with pytest.raises(InsufficientQuestionsError) as exc_info:
        await fetcher.fetch_unseen_questions(object(), user_id=5, category_id=3)

    assert exc_info.value.remaining == 9
    assert "9" in exc_info.value.message
    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "E_INSUFFICIENT_QUESTIONS"


@pytest.mark.asyncio
async def test_fetch_unseen_questions_rejects_unknown_category(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_repos(monkeypatch, unseen=15, category_exists=False)

    with pytest.raises(CategoryNotFoundError):
        await fetcher.fetch_unseen_questions(object(), user_id=5, category_id=404)


@pytest.mark.asyncio
async def test_fetch_unseen_questions_honours_custom_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _patch_repos(monkeypatch, unseen=6)

    questions = await fetcher.fetch_unseen_questions(object(), user_id=5, category_id=3, limit=5)

    assert len(questions) == 5
    assert calls["limit"] == 5
