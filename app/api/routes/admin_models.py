from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class CategoryWriteRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class AdminCategoryResponse(BaseModel):
    id: int
    name: str
    question_count: int = Field(ge=0)


class QuestionWriteRequest(BaseModel):
    question_text: str = Field(min_length=1)
    option_a: str = Field(min_length=1)
    option_b: str = Field(min_length=1)
    option_c: str = Field(min_length=1)
    option_d: str = Field(min_length=1)
    correct_option: str = Field(min_length=1, max_length=1)
    category_id: int = Field(gt=0)


class AdminQuestionResponse(BaseModel):
    id: int
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_option: str
    category_id: int
    category_name: str


class AdminQuestionPageResponse(BaseModel):
    items: list[AdminQuestionResponse]
    total: int = Field(ge=0)
    limit: int
    offset: int


class UserRoleRequest(BaseModel):
    role: Literal["USER", "ADMIN"]


class AdminUserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    total_play_count: int
    total_score: int
    created_at: datetime
    last_login_at: datetime | None = None


class AdminUserPageResponse(BaseModel):
    items: list[AdminUserResponse]
    total: int = Field(ge=0)
    limit: int
    offset: int


class AdminFeedbackResponse(BaseModel):
    id: int
    name: str
    email: str
    message: str
    created_at: datetime


class AdminFeedbackPageResponse(BaseModel):
    items: list[AdminFeedbackResponse]
    total: int = Field(ge=0)
    limit: int
    offset: int


class AdminStatisticsResponse(BaseModel):
    total_users: int = Field(ge=0)
    total_categories: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    total_quizzes: int = Field(ge=0)
    total_feedback: int = Field(ge=0)
