"""Pydantic models for study-artifact generation.

``FlashcardDraft`` and ``QuizQuestion`` describe what the model is asked to
emit; they are validated before anything reaches the database. Field names
follow the JSON the model produces (``correctIndex``), python names are
snake_case.
"""

from __future__ import annotations

import enum
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)


QUIZ_OPTION_COUNT = 4
DEFAULT_QUESTION_COUNT = 10

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class TaskKind(str, enum.Enum):
    CHAT = "chat"
    SUMMARY = "summary"
    EXPLAIN = "explain"
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"

    @property
    def is_structured(self) -> bool:
        return self in (TaskKind.FLASHCARDS, TaskKind.QUIZ)


class GenerationState(str, enum.Enum):
    FETCHING_DOCUMENT = "fetching_document"
    PROMPTING_MODEL = "prompting_model"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class GenerationTask(BaseModel):
    """One generation request; built per call and never stored."""

    kind: TaskKind
    document_id: int
    message: Optional[str] = None
    concept: Optional[str] = None
    question_count: int = Field(default=DEFAULT_QUESTION_COUNT, ge=1)


class FlashcardDraft(BaseModel):
    """A validated question/answer pair not yet bound to an owner."""

    model_config = ConfigDict(extra="ignore")

    front: NonEmptyStr
    back: NonEmptyStr


class QuizQuestion(BaseModel):
    """A single multiple-choice question with exactly four options."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    question: NonEmptyStr
    options: list[NonEmptyStr] = Field(
        min_length=QUIZ_OPTION_COUNT, max_length=QUIZ_OPTION_COUNT
    )
    correct_index: int = Field(alias="correctIndex", strict=True)
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def _correct_index_in_range(self) -> "QuizQuestion":
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"correctIndex {self.correct_index} is outside 0..{len(self.options) - 1}"
            )
        return self

    def to_record(self) -> dict:
        """JSON shape stored in ``Quiz.questions``."""
        return self.model_dump(by_alias=True)


__all__ = [
    "QUIZ_OPTION_COUNT",
    "DEFAULT_QUESTION_COUNT",
    "TaskKind",
    "GenerationState",
    "GenerationTask",
    "FlashcardDraft",
    "QuizQuestion",
]
