from __future__ import annotations

import json

import httpx
import pytest

from app.game.sessions.tracker import QuizSessionTracker
from app.game.sessions.types import SessionState
from scripts.play_quiz import QuizApiClient, QuizApiError


def _question_payload(question_id: int) -> dict[str, object]:
    return {
        "id": question_id,
        "category_id": 3,
        "question_text": f"Question {question_id}?",
        "option_a": "one",
        "option_b": "two",
        "option_c": "three",
        "option_d": "four",
        "correct_option": "B",
    }


@pytest.mark.asyncio
async def test_tracker_plays_quiz_against_api_client() -> None:
    submitted: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/questions/start":
            assert json.loads(request.content) == {"category_id": 3}
            return httpx.Response(
                200,
                json={"category_id": 3, "questions": [_question_payload(index) for index in range(1, 4)]},
            )
        if request.url.path == "/api/quizzes":
            submitted.append(json.loads(request.content))
            return httpx.Response(201, json={"quiz_id": 77})
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://quiz.test") as client:
        api = QuizApiClient(client)
        tracker = QuizSessionTracker(question_source=api.fetch_questions, submitter=api.submit_result)

        await tracker.start(3)
        for letter in ("B", "C", "B"):
            await tracker.submit_answer(letter)

    assert tracker.state is SessionState.SUBMITTED
    assert tracker.result_id == 77
    assert len(submitted) == 1
    assert submitted[0]["correct_answers"] == 2
    assert submitted[0]["incorrect_answers"] == 1
    assert submitted[0]["score"] == 67
    assert len(submitted[0]["interactions"]) == 3  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_api_client_raises_typed_error_from_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        return httpx.Response(
            404,
            json={"detail": {"code": "E_INSUFFICIENT_QUESTIONS", "message": "Only 9 unanswered questions left."}},
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://quiz.test") as client:
        api = QuizApiClient(client)
        with pytest.raises(QuizApiError) as exc_info:
            await api.fetch_questions(3)

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "E_INSUFFICIENT_QUESTIONS"
