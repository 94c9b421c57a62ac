from __future__ import annotations

import pytest

from app.game.scoring import score


@pytest.mark.parametrize(
    ("correct", "total", "expected"),
    [
        (0, 10, 0),
        (10, 10, 100),
        (7, 10, 70),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (1, 2, 50),
    ],
)
def test_score_rounds_percentage_half_up(correct: int, total: int, expected: int) -> None:
    assert score(correct, total) == expected


def test_score_is_monotonic_and_bounded() -> None:
    for total in range(1, 21):
        values = [score(correct, total) for correct in range(total + 1)]
        assert values == sorted(values)
        assert values[0] == 0
        assert values[-1] == 100


@pytest.mark.parametrize(("correct", "total"), [(0, 0), (1, 0), (-1, 10), (11, 10)])
def test_score_rejects_out_of_range_input(correct: int, total: int) -> None:
    with pytest.raises(ValueError):
        score(correct, total)
