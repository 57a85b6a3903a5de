from __future__ import annotations

from fastapi import APIRouter, status

from studyai.apis.deps import CurrentUser, Orchestrator
from studyai.apis.flashcards.schemas import FlashcardRead
from studyai.apis.quizzes.schemas import QuizRead
from studyai.core.config import settings
from .schemas import (
    AnswerResponse,
    ChatRequest,
    DocumentRequest,
    ExplainRequest,
    ExplanationResponse,
    QuizRequest,
    SummaryResponse,
)


router = APIRouter()


@router.post(
    f"/{settings.app.version}/ai/chat",
    response_model=AnswerResponse,
    tags=["ai"],
)
async def chat(
    req: ChatRequest, user: CurrentUser, orchestrator: Orchestrator
) -> AnswerResponse:
    """Answer a question using only the document's text."""
    result = await orchestrator.chat(user.id, req.document_id, req.message)
    return AnswerResponse(**result)


@router.post(
    f"/{settings.app.version}/ai/summary",
    response_model=SummaryResponse,
    tags=["ai"],
)
async def summarize(
    req: DocumentRequest, user: CurrentUser, orchestrator: Orchestrator
) -> SummaryResponse:
    result = await orchestrator.summarize(user.id, req.document_id)
    return SummaryResponse(**result)


@router.post(
    f"/{settings.app.version}/ai/explain",
    response_model=ExplanationResponse,
    tags=["ai"],
)
async def explain(
    req: ExplainRequest, user: CurrentUser, orchestrator: Orchestrator
) -> ExplanationResponse:
    result = await orchestrator.explain(user.id, req.document_id, req.concept)
    return ExplanationResponse(**result)


@router.post(
    f"/{settings.app.version}/ai/flashcards",
    response_model=list[FlashcardRead],
    status_code=status.HTTP_201_CREATED,
    tags=["ai"],
)
async def generate_flashcards(
    req: DocumentRequest, user: CurrentUser, orchestrator: Orchestrator
) -> list[FlashcardRead]:
    """Generate a new flashcard batch; earlier batches are kept."""
    cards = await orchestrator.generate_flashcards(user.id, req.document_id)
    return [FlashcardRead.model_validate(c) for c in cards]


@router.post(
    f"/{settings.app.version}/ai/quiz",
    response_model=QuizRead,
    status_code=status.HTTP_201_CREATED,
    tags=["ai"],
)
async def generate_quiz(
    req: QuizRequest, user: CurrentUser, orchestrator: Orchestrator
) -> QuizRead:
    quiz = await orchestrator.generate_quiz(
        user.id, req.document_id, question_count=req.question_count
    )
    return QuizRead.model_validate(quiz)
