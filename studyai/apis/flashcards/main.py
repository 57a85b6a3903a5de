from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from studyai.apis.deps import CurrentUser, Session
from studyai.core.config import settings
from studyai.core.db_services import FlashcardStore
from .schemas import FavoriteRequest, FlashcardRead


router = APIRouter()


@router.get(
    f"/{settings.app.version}/flashcards/{{document_id:int}}",
    response_model=list[FlashcardRead],
    tags=["flashcards"],
)
async def list_document_flashcards(
    document_id: int,
    user: CurrentUser,
    session: Session,
) -> list[FlashcardRead]:
    cards = await FlashcardStore(session).list_for_document(user.id, document_id)
    return [FlashcardRead.model_validate(c) for c in cards]


@router.patch(
    f"/{settings.app.version}/flashcards/{{flashcard_id:int}}/favorite",
    response_model=FlashcardRead,
    tags=["flashcards"],
)
async def set_favorite(
    flashcard_id: int,
    req: FavoriteRequest,
    user: CurrentUser,
    session: Session,
) -> FlashcardRead:
    store = FlashcardStore(session)
    card = await store.get_owned(user.id, flashcard_id)
    if not card:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Flashcard not found"
        )
    card = await store.set_favorite(card, req.is_favorite)
    return FlashcardRead.model_validate(card)
