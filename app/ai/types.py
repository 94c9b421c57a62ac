from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OptionLetter = Literal["A", "B", "C", "D"]


class GeneratedOptions(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    A: str = Field(min_length=1)
    B: str = Field(min_length=1)
    C: str = Field(min_length=1)
    D: str = Field(min_length=1)


class GeneratedQuestion(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    question: str = Field(min_length=1)
    options: GeneratedOptions
    correct_option: OptionLetter

    @field_validator("correct_option", mode="before")
    @classmethod
    def normalize_letter(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value
