from __future__ import annotations

import random

import pytest

from app.game.questions.types import QuizQuestion
from app.game.sessions.errors import InvalidAnswerOptionError, SessionStateError
from app.game.sessions.tracker import QuizSessionTracker, normalize_answer_letter
from app.game.sessions.types import QuizSubmission, SessionState


def _questions(count: int, *, correct_option: str = "A") -> list[QuizQuestion]:
    return [
        QuizQuestion(
            question_id=index,
            text=f"Question {index}?",
            options=("one", "two", "three", "four"),
            correct_option=correct_option,
            category_id=7,
        )
        for index in range(1, count + 1)
    ]


def _tracker(
    questions: list[QuizQuestion],
    submissions: list[QuizSubmission],
    *,
    result_id: int = 99,
) -> QuizSessionTracker:
    async def question_source(category_id: int) -> list[QuizQuestion]:
        assert category_id == 7
        return list(questions)

    async def submitter(submission: QuizSubmission) -> int:
        submissions.append(submission)
        return result_id

    return QuizSessionTracker(
        question_source=question_source,
        submitter=submitter,
        rng=random.Random(5),
    )


@pytest.mark.asyncio
async def test_tracker_counts_answers_and_submits_once() -> None:
    submissions: list[QuizSubmission] = []
    tracker = _tracker(_questions(10), submissions)

    first = await tracker.start(7)
    assert tracker.state is SessionState.IN_PROGRESS
    assert tracker.current_question == first

    letters = ["A", "B", "a", "C", "A", "D", "A", "A", "b", "A"]
    outcomes = [await tracker.submit_answer(letter) for letter in letters]

    assert tracker.correct_count == 6
    assert tracker.incorrect_count == 4
    assert tracker.correct_count + tracker.incorrect_count == 10
    assert tracker.state is SessionState.SUBMITTED
    assert tracker.result_id == 99
    assert tracker.current_question is None
    assert [outcome.finished for outcome in outcomes] == [False] * 9 + [True]
    assert outcomes[-1].result_id == 99
    assert outcomes[0].next_index == 1
    assert outcomes[-1].next_index is None

    assert len(submissions) == 1
    submission = submissions[0]
    assert submission.category_id == 7
    assert submission.total_questions == 10
    assert submission.correct_answers == 6
    assert submission.incorrect_answers == 4
    assert submission.score == 60
    assert [answer.user_answer for answer in submission.answers] == [letter.upper() for letter in letters]


@pytest.mark.asyncio
async def test_tracker_rejects_answer_after_submission() -> None:
    submissions: list[QuizSubmission] = []
    tracker = _tracker(_questions(1), submissions)
    await tracker.start(7)
    await tracker.submit_answer("A")

    with pytest.raises(SessionStateError):
        await tracker.submit_answer("A")

    assert len(submissions) == 1
    assert tracker.correct_count == 1


@pytest.mark.asyncio
async def test_tracker_rejects_answer_before_start() -> None:
    tracker = _tracker(_questions(3), [])

    with pytest.raises(SessionStateError):
        await tracker.submit_answer("A")


@pytest.mark.asyncio
async def test_tracker_rejects_second_start() -> None:
    tracker = _tracker(_questions(3), [])
    await tracker.start(7)

    with pytest.raises(SessionStateError):
        await tracker.start(7)


@pytest.mark.asyncio
async def test_tracker_rejects_empty_question_list() -> None:
    tracker = _tracker([], [])

    with pytest.raises(SessionStateError):
        await tracker.start(7)
    assert tracker.state is SessionState.NOT_STARTED


@pytest.mark.asyncio
async def test_tracker_rejects_invalid_letter_without_recording() -> None:
    tracker = _tracker(_questions(2), [])
    await tracker.start(7)

    with pytest.raises(InvalidAnswerOptionError):
        await tracker.submit_answer("E")

    assert tracker.answers == ()
    assert tracker.current_index == 0


@pytest.mark.asyncio
async def test_tracker_keeps_session_open_when_submitter_fails() -> None:
    calls = {"count": 0}

    async def question_source(category_id: int) -> list[QuizQuestion]:
        del category_id
        return _questions(1)

    async def flaky_submitter(submission: QuizSubmission) -> int:
        del submission
        calls["count"] += 1
        if calls["count"] == 1:
            raise ConnectionError("network down")
        return 42

    tracker = QuizSessionTracker(question_source=question_source, submitter=flaky_submitter)
    await tracker.start(7)

    with pytest.raises(ConnectionError):
        await tracker.submit_answer("A")
    assert tracker.state is SessionState.IN_PROGRESS

    with pytest.raises(SessionStateError):
        await tracker.submit_answer("B")

    assert await tracker.finish() == 42
    assert tracker.state is SessionState.SUBMITTED
    assert tracker.correct_count == 1
    assert calls["count"] == 2


@pytest.mark.asyncio
async def test_tracker_finish_requires_all_answers() -> None:
    tracker = _tracker(_questions(3), [])
    await tracker.start(7)
    await tracker.submit_answer("A")

    with pytest.raises(SessionStateError):
        await tracker.finish()


def test_normalize_answer_letter() -> None:
    assert normalize_answer_letter(" c ") == "C"
    with pytest.raises(InvalidAnswerOptionError):
        normalize_answer_letter("")
