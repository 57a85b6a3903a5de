"""Study-artifact generation module exports."""

from .extraction import extract_json_array
from .gateway import ModelGateway, TextGenerator
from .models import FlashcardDraft, GenerationTask, QuizQuestion, TaskKind
from .orchestrator import GenerationOrchestrator
from .validation import parse_flashcards, parse_quiz_questions

__all__ = [
    "extract_json_array",
    "ModelGateway",
    "TextGenerator",
    "FlashcardDraft",
    "GenerationTask",
    "QuizQuestion",
    "TaskKind",
    "GenerationOrchestrator",
    "parse_flashcards",
    "parse_quiz_questions",
]
