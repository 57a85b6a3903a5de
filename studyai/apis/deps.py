from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyai.core.config import settings
from studyai.core.db.base import get_session
from studyai.core.db.schemas.auth import User
from studyai.modules.auth import current_active_user
from studyai.modules.study.gateway import ModelGateway, TextGenerator
from studyai.modules.study.orchestrator import GenerationOrchestrator


def get_model_gateway() -> TextGenerator:
    """Gateway built from the current settings; overridable in tests."""
    return ModelGateway(settings.gemini_api_key, model_name=settings.gemini_model)


async def get_orchestrator(
    session: AsyncSession = Depends(get_session),
    gateway: TextGenerator = Depends(get_model_gateway),
) -> GenerationOrchestrator:
    return GenerationOrchestrator.for_session(session, gateway)


CurrentUser = Annotated[User, Depends(current_active_user)]
Orchestrator = Annotated[GenerationOrchestrator, Depends(get_orchestrator)]
Session = Annotated[AsyncSession, Depends(get_session)]
