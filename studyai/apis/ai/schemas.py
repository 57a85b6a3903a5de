from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

from studyai.apis.schemas import CamelModel
from studyai.modules.study.models import DEFAULT_QUESTION_COUNT


Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class DocumentRequest(CamelModel):
    document_id: int


class ChatRequest(DocumentRequest):
    message: Text


class ExplainRequest(DocumentRequest):
    concept: Text


class QuizRequest(DocumentRequest):
    question_count: int = Field(default=DEFAULT_QUESTION_COUNT, ge=1, le=50)


class AnswerResponse(CamelModel):
    answer: str


class SummaryResponse(CamelModel):
    summary: str


class ExplanationResponse(CamelModel):
    explanation: str
