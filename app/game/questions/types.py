from __future__ import annotations

from dataclasses import dataclass

OPTION_LETTERS: tuple[str, str, str, str] = ("A", "B", "C", "D")


@dataclass(slots=True)
class QuizQuestion:
    question_id: int
    text: str
    options: tuple[str, str, str, str]
    correct_option: str
    category_id: int | None = None

    def option_text(self, letter: str) -> str:
        return self.options[OPTION_LETTERS.index(letter.upper())]
