from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from studyai.apis.deps import CurrentUser, Session
from studyai.core.config import settings
from studyai.core.db_services import QuizStore
from .schemas import QuizRead


router = APIRouter()


@router.get(
    f"/{settings.app.version}/quizzes/latest/{{document_id:int}}",
    response_model=QuizRead,
    tags=["quizzes"],
)
async def get_latest_quiz(
    document_id: int,
    user: CurrentUser,
    session: Session,
) -> QuizRead:
    quiz = await QuizStore(session).find_latest_by_document(user.id, document_id)
    if not quiz:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No quiz found for this document",
        )
    return QuizRead.model_validate(quiz)
