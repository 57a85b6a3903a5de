from __future__ import annotations

from datetime import datetime

from studyai.apis.schemas import CamelModel
from studyai.modules.study.models import QuizQuestion


class QuizRead(CamelModel):
    id: int
    owner_id: int
    document_id: int
    questions: list[QuizQuestion]
    created_at: datetime
    updated_at: datetime
