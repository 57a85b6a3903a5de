"""
Shared fixtures: in-memory SQLite database, seeded users/documents and a
recording fake for the model gateway.
"""

import os

# Settings are read at import time; provide what the app requires.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from studyai.core.db.base import Base, build_engine, build_session_maker
from studyai.core.db.schemas import Flashcard, Quiz, StudyDocument, User  # noqa: F401
from studyai.modules.study.orchestrator import GenerationOrchestrator


class FakeGateway:
    """Records every call and returns a canned answer (or raises)."""

    def __init__(self, output: str = "", error: Optional[Exception] = None) -> None:
        self.output = output
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate_text(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
async def db_engine():
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(db_engine):
    maker = build_session_maker(db_engine)
    async with maker() as s:
        yield s


async def _make_user(session: AsyncSession, email: str) -> User:
    user = User(
        email=email,
        name=email.split("@")[0],
        hashed_password="not-a-real-hash",
        is_active=True,
        is_superuser=False,
        is_verified=True,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def user(session):
    return await _make_user(session, "student@example.com")


@pytest.fixture
async def other_user(session):
    return await _make_user(session, "someone-else@example.com")


@pytest.fixture
def make_document(session):
    async def _make(owner: User, text: Optional[str] = "Photosynthesis converts light to energy.") -> StudyDocument:
        doc = StudyDocument(
            owner_id=owner.id,
            title="Biology notes",
            original_file_name="biology.pdf",
            storage_path="uploads/biology.pdf",
            text_content=text,
        )
        session.add(doc)
        await session.commit()
        await session.refresh(doc)
        return doc

    return _make


@pytest.fixture
async def document(make_document, user):
    return await make_document(user)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def orchestrator(session, gateway):
    return GenerationOrchestrator.for_session(session, gateway)
