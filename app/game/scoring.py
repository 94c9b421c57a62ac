from __future__ import annotations


def score(correct: int, total: int) -> int:
    """Integer percentage of correct answers, rounded half up.

    Matches the rounding the result pages have always shown, so ``score(1, 8)``
    is 13 rather than banker's-rounded 12.
    """
    if total <= 0:
        raise ValueError("total must be positive")
    if correct < 0 or correct > total:
        raise ValueError("correct must be between 0 and total")
    return (correct * 200 + total) // (2 * total)
