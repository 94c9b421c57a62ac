from __future__ import annotations

import argparse
import asyncio
import getpass
from typing import Any

import httpx

from app.game.questions.types import OPTION_LETTERS, QuizQuestion
from app.game.sessions.tracker import QuizSessionTracker
from app.game.sessions.types import QuizSubmission

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class QuizApiError(RuntimeError):
    def __init__(self, status_code: int, code: str, message: str) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(f"{code} ({status_code}): {message}")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a quiz against the API from the terminal.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--email", required=True)
    parser.add_argument("--category-id", type=int, default=None)
    return parser.parse_args(argv)


def _raise_for_api_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, dict):
        raise QuizApiError(response.status_code, str(detail.get("code")), str(detail.get("message")))
    raise QuizApiError(response.status_code, "E_HTTP", response.text)


def question_from_payload(payload: dict[str, Any]) -> QuizQuestion:
    return QuizQuestion(
        question_id=int(payload["id"]),
        text=str(payload["question_text"]),
        options=(
            str(payload["option_a"]),
            str(payload["option_b"]),
            str(payload["option_c"]),
            str(payload["option_d"]),
        ),
        correct_option=str(payload["correct_option"]).upper(),
        category_id=payload.get("category_id"),
    )


def submission_to_payload(submission: QuizSubmission) -> dict[str, Any]:
    return {
        "category_id": submission.category_id,
        "total_questions": submission.total_questions,
        "correct_answers": submission.correct_answers,
        "incorrect_answers": submission.incorrect_answers,
        "score": submission.score,
        "interactions": [
            {
                "question_id": answer.question_id,
                "user_answer": answer.user_answer,
                "is_correct": answer.is_correct,
            }
            for answer in submission.answers
        ],
    }


class QuizApiClient:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def login(self, *, email: str, password: str) -> dict[str, Any]:
        response = await self._client.post("/api/auth/login", json={"email": email, "password": password})
        _raise_for_api_error(response)
        return response.json()

    async def list_categories(self) -> list[dict[str, Any]]:
        response = await self._client.get("/api/categories")
        _raise_for_api_error(response)
        return response.json()

    async def fetch_questions(self, category_id: int) -> list[QuizQuestion]:
        response = await self._client.post("/api/questions/start", json={"category_id": category_id})
        _raise_for_api_error(response)
        return [question_from_payload(item) for item in response.json()["questions"]]

    async def submit_result(self, submission: QuizSubmission) -> int:
        response = await self._client.post("/api/quizzes", json=submission_to_payload(submission))
        _raise_for_api_error(response)
        return int(response.json()["quiz_id"])

    async def get_result(self, quiz_id: int) -> dict[str, Any]:
        response = await self._client.get(f"/api/quizzes/{quiz_id}")
        _raise_for_api_error(response)
        return response.json()


async def _prompt(text: str) -> str:
    return await asyncio.to_thread(input, text)


async def _choose_category(api: QuizApiClient) -> int:
    categories = await api.list_categories()
    for category in categories:
        print(f"  [{category['id']}] {category['name']} ({category['question_count']} questions)")  # noqa: T201
    while True:
        raw = (await _prompt("Category id: ")).strip()
        if raw.isdigit():
            return int(raw)


async def _play(api: QuizApiClient, *, category_id: int) -> int:
    tracker = QuizSessionTracker(question_source=api.fetch_questions, submitter=api.submit_result)
    question: QuizQuestion | None = await tracker.start(category_id)

    while question is not None:
        position = tracker.current_index + 1
        print(f"\nQuestion {position}/{len(tracker.questions)}: {question.text}")  # noqa: T201
        for letter in OPTION_LETTERS:
            print(f"  {letter}) {question.option_text(letter)}")  # noqa: T201

        letter = (await _prompt("Your answer: ")).strip().upper()
        if letter not in OPTION_LETTERS:
            print("Please answer with A, B, C or D.")  # noqa: T201
            continue

        outcome = await tracker.submit_answer(letter)
        verdict = "correct" if outcome.is_correct else f"wrong, the answer was {outcome.correct_option}"
        print(f"  -> {verdict} ({outcome.correct_count} right, {outcome.incorrect_count} wrong)")  # noqa: T201
        question = tracker.current_question

    if tracker.result_id is None:
        raise RuntimeError("quiz finished without a stored result")
    return tracker.result_id


async def _run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    password = await asyncio.to_thread(getpass.getpass, "Password: ")

    async with httpx.AsyncClient(base_url=args.base_url, timeout=30.0) as client:
        api = QuizApiClient(client)
        try:
            await api.login(email=args.email, password=password)
            category_id = args.category_id or await _choose_category(api)
            quiz_id = await _play(api, category_id=category_id)
            result = await api.get_result(quiz_id)
        except QuizApiError as exc:
            print(f"quiz_failed {exc}")  # noqa: T201
            return 1

    print(  # noqa: T201
        f"\nquiz_finished quiz_id={result['quiz_id']} category={result['category_name']} "
        f"score={result['score']} correct={result['correct_answers']}/{result['total_questions']}"
    )
    return 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
