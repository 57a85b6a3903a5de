"""Parse and validate structured model output.

Validation is all-or-nothing: a single malformed element rejects the whole
batch with ``GenerationFormatError``, so a half-built study set never reaches
the database.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from studyai.core.errors import GenerationFormatError
from studyai.modules.study.models import FlashcardDraft, QuizQuestion


T = TypeVar("T")

_FLASHCARDS = TypeAdapter(list[FlashcardDraft])
_QUIZ_QUESTIONS = TypeAdapter(list[QuizQuestion])


def _describe(err: ValidationError) -> str:
    first = err.errors(include_url=False)[0]
    loc = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
    return f"{loc}: {first.get('msg', 'invalid value')}"


def _validate(adapter: TypeAdapter[list[T]], json_text: str, label: str) -> list[T]:
    try:
        items = adapter.validate_json(json_text)
    except ValidationError as e:
        if any(d.get("type") == "json_invalid" for d in e.errors(include_url=False)):
            raise GenerationFormatError(
                f"Failed to parse {label} from AI. Please try generating again."
            ) from e
        raise GenerationFormatError(
            f"AI returned malformed {label} ({_describe(e)}). Please try generating again."
        ) from e
    if not items:
        raise GenerationFormatError(
            f"AI returned no {label}. Please try generating again."
        )
    return items


def parse_flashcards(json_text: str) -> list[FlashcardDraft]:
    return _validate(_FLASHCARDS, json_text, "flashcards")


def parse_quiz_questions(json_text: str) -> list[QuizQuestion]:
    return _validate(_QUIZ_QUESTIONS, json_text, "quiz questions")
