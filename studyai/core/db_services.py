"""Database service classes for documents and generated study records.

Every lookup is filtered by owner; callers never see another user's rows.
"""

from __future__ import annotations

from typing import Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select

from studyai.core.db.schemas.documents import StudyDocument
from studyai.core.db.schemas.study import Flashcard, Quiz


class DocumentStore:
    """Service for uploaded documents and their extracted text."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_owned_document(
        self, owner_id: int, document_id: int
    ) -> Optional[StudyDocument]:
        result = await self.session.execute(
            select(StudyDocument).where(
                StudyDocument.id == document_id,
                StudyDocument.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_owner(self, owner_id: int) -> Sequence[StudyDocument]:
        result = await self.session.execute(
            select(StudyDocument)
            .where(StudyDocument.owner_id == owner_id)
            .order_by(StudyDocument.created_at.desc(), StudyDocument.id.desc())
        )
        return result.scalars().all()

    async def create(
        self,
        *,
        owner_id: int,
        title: str,
        original_file_name: str,
        storage_path: str,
        text_content: Optional[str],
    ) -> StudyDocument:
        doc = StudyDocument(
            owner_id=owner_id,
            title=title,
            original_file_name=original_file_name,
            storage_path=storage_path,
            text_content=text_content,
        )
        self.session.add(doc)
        await self.session.commit()
        await self.session.refresh(doc)
        return doc

    async def delete_with_artifacts(self, doc: StudyDocument) -> None:
        """Delete a document together with its flashcards and quizzes."""
        await self.session.execute(
            delete(Flashcard).where(
                Flashcard.owner_id == doc.owner_id, Flashcard.document_id == doc.id
            )
        )
        await self.session.execute(
            delete(Quiz).where(Quiz.owner_id == doc.owner_id, Quiz.document_id == doc.id)
        )
        await self.session.delete(doc)
        await self.session.commit()


class FlashcardStore:
    """Service for flashcard batches produced by generation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert_batch(self, records: Sequence[Flashcard]) -> list[Flashcard]:
        """Insert one generated batch; earlier batches are left in place."""
        cards = list(records)
        self.session.add_all(cards)
        await self.session.commit()
        for card in cards:
            await self.session.refresh(card)
        return cards

    async def list_for_document(
        self, owner_id: int, document_id: int
    ) -> Sequence[Flashcard]:
        result = await self.session.execute(
            select(Flashcard)
            .where(Flashcard.owner_id == owner_id, Flashcard.document_id == document_id)
            .order_by(Flashcard.created_at.desc(), Flashcard.id.desc())
        )
        return result.scalars().all()

    async def get_owned(self, owner_id: int, flashcard_id: int) -> Optional[Flashcard]:
        result = await self.session.execute(
            select(Flashcard).where(
                Flashcard.id == flashcard_id, Flashcard.owner_id == owner_id
            )
        )
        return result.scalar_one_or_none()

    async def set_favorite(
        self, card: Flashcard, is_favorite: Optional[bool] = None
    ) -> Flashcard:
        """Set the favorite flag, or toggle it when no value is given."""
        card.is_favorite = (not card.is_favorite) if is_favorite is None else is_favorite
        await self.session.commit()
        await self.session.refresh(card)
        return card


class QuizStore:
    """Service for generated quizzes; one row per generation call."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert_one(self, quiz: Quiz) -> Quiz:
        self.session.add(quiz)
        await self.session.commit()
        await self.session.refresh(quiz)
        return quiz

    async def find_latest_by_document(
        self, owner_id: int, document_id: int
    ) -> Optional[Quiz]:
        result = await self.session.execute(
            select(Quiz)
            .where(Quiz.owner_id == owner_id, Quiz.document_id == document_id)
            # id breaks ties between quizzes created within the same second
            .order_by(Quiz.created_at.desc(), Quiz.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()


__all__ = ["DocumentStore", "FlashcardStore", "QuizStore"]
