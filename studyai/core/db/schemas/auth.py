from __future__ import annotations

from typing import TYPE_CHECKING
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fastapi_users_db_sqlalchemy import SQLAlchemyBaseUserTable

from studyai.core.db.base import Base

if TYPE_CHECKING:
    from .documents import StudyDocument
    from .study import Flashcard, Quiz


class User(SQLAlchemyBaseUserTable[int], Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Everything a user owns goes with the account
    documents: Mapped[list["StudyDocument"]] = relationship(
        "StudyDocument", back_populates="owner", cascade="all, delete-orphan"
    )
    flashcards: Mapped[list["Flashcard"]] = relationship(
        "Flashcard", back_populates="owner", cascade="all, delete-orphan"
    )
    quizzes: Mapped[list["Quiz"]] = relationship(
        "Quiz", back_populates="owner", cascade="all, delete-orphan"
    )


__all__ = ["User"]
