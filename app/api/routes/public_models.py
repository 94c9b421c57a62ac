from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator

from app.services.user_auth import BCRYPT_MAX_PASSWORD_BYTES

OptionLetter = Literal["A", "B", "C", "D"]


class RegisterRequest(BaseModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=64)]
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("password")
    @classmethod
    def bcrypt_max_bytes(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password too long (max {BCRYPT_MAX_PASSWORD_BYTES} bytes).")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: datetime
    last_login_at: datetime | None = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    question_count: int = Field(ge=0)


class StartQuizRequest(BaseModel):
    category_id: int = Field(gt=0)


class QuizQuestionResponse(BaseModel):
    id: int
    category_id: int | None = None
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_option: OptionLetter


class StartQuizResponse(BaseModel):
    category_id: int
    questions: list[QuizQuestionResponse]


class InteractionRequest(BaseModel):
    question_id: int = Field(gt=0)
    user_answer: OptionLetter
    is_correct: bool


class FinishQuizRequest(BaseModel):
    category_id: int = Field(gt=0)
    total_questions: int = Field(gt=0)
    correct_answers: int = Field(ge=0)
    incorrect_answers: int = Field(ge=0)
    score: int = Field(ge=0, le=100)
    interactions: list[InteractionRequest] = Field(min_length=1)


class FinishQuizResponse(BaseModel):
    quiz_id: int


class QuizResultQuestionResponse(BaseModel):
    question_id: int
    question: str
    options: dict[str, str]
    user_answer: str
    correct_answer: str
    is_correct: bool


class QuizResultResponse(BaseModel):
    quiz_id: int
    category_id: int
    category_name: str
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    score: int
    played_at: datetime
    questions: list[QuizResultQuestionResponse]


class QuizHistoryItemResponse(BaseModel):
    quiz_id: int
    category_name: str
    score: int
    correct_answers: int
    total_questions: int
    played_at: datetime


class UserProfileResponse(BaseModel):
    user_id: int
    username: str
    email: str
    total_play_count: int
    total_score: int
    total_correct_answers: int
    total_questions_attempted: int
    average_score: int
    best_category: str | None = None
    worst_category: str | None = None
    created_at: datetime


class LeaderboardEntryResponse(BaseModel):
    rank: int
    username: str
    total_score: int
    quiz_count: int
    average_score: int


class FeedbackRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    message: str = Field(min_length=10, max_length=5000)


class FeedbackResponse(BaseModel):
    id: int
    created_at: datetime


class GenerateQuestionsRequest(BaseModel):
    category_id: int | None = Field(default=None, gt=0)
    topic: str | None = None


class GeneratedOptionsResponse(BaseModel):
    A: str
    B: str
    C: str
    D: str


class GeneratedQuestionResponse(BaseModel):
    question: str
    options: GeneratedOptionsResponse
    correct_option: OptionLetter


class GenerateQuestionsResponse(BaseModel):
    topic: str
    questions: list[GeneratedQuestionResponse]
