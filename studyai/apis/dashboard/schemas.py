from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from studyai.apis.schemas import CamelModel


class Totals(CamelModel):
    documents: int = 0
    flashcards: int = 0
    quizzes: int = 0
    favorites: int = 0


class ActivityItem(CamelModel):
    type: Literal["document", "quiz"]
    id: int
    title: Optional[str] = None
    created_at: datetime


class DashboardSummary(CamelModel):
    totals: Totals
    recent_activity: list[ActivityItem] = Field(default_factory=list)
