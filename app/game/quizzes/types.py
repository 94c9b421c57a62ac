from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class UserProfileStats:
    user_id: int
    username: str
    email: str
    total_play_count: int
    total_score: int
    total_correct_answers: int
    total_questions_attempted: int
    average_score: int
    best_category: str | None
    worst_category: str | None
    created_at: datetime
