from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import func, select

from studyai.apis.deps import CurrentUser, Session
from studyai.core.config import settings
from studyai.core.db.schemas.documents import StudyDocument
from studyai.core.db.schemas.study import Flashcard, Quiz
from .schemas import ActivityItem, DashboardSummary, Totals


router = APIRouter()

RECENT_PER_KIND = 5
RECENT_ACTIVITY_LIMIT = 8


@router.get(
    f"/{settings.app.version}/dashboard/summary",
    response_model=DashboardSummary,
    tags=["dashboard"],
)
async def dashboard_summary(user: CurrentUser, session: Session) -> DashboardSummary:
    async def _count(model, *criteria) -> int:
        res = await session.execute(
            select(func.count(model.id)).where(model.owner_id == user.id, *criteria)
        )
        return res.scalar() or 0

    totals = Totals(
        documents=await _count(StudyDocument),
        flashcards=await _count(Flashcard),
        quizzes=await _count(Quiz),
        favorites=await _count(Flashcard, Flashcard.is_favorite.is_(True)),
    )

    docs = (
        await session.execute(
            select(StudyDocument)
            .where(StudyDocument.owner_id == user.id)
            .order_by(StudyDocument.created_at.desc(), StudyDocument.id.desc())
            .limit(RECENT_PER_KIND)
        )
    ).scalars().all()
    quizzes = (
        await session.execute(
            select(Quiz)
            .where(Quiz.owner_id == user.id)
            .order_by(Quiz.created_at.desc(), Quiz.id.desc())
            .limit(RECENT_PER_KIND)
        )
    ).scalars().all()

    activity = [
        ActivityItem(type="document", id=d.id, title=d.title, created_at=d.created_at)
        for d in docs
    ] + [ActivityItem(type="quiz", id=q.id, created_at=q.created_at) for q in quizzes]
    activity.sort(key=lambda it: it.created_at, reverse=True)

    return DashboardSummary(
        totals=totals, recent_activity=activity[:RECENT_ACTIVITY_LIMIT]
    )
