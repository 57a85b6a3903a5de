from fastapi import FastAPI
from contextlib import asynccontextmanager
from studyai.core.config import settings
from studyai.core.errors import register_exception_handlers
from studyai.core.logging import get_logger, setup_logging
from studyai.apis.auth.main import router as auth_router
from studyai.apis.documents.main import router as documents_router
from studyai.apis.ai.main import router as ai_router
from studyai.apis.flashcards.main import router as flashcards_router
from studyai.apis.quizzes.main import router as quizzes_router
from studyai.apis.dashboard.main import router as dashboard_router

import uvicorn
from fastapi.middleware.cors import CORSMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.gemini_api_key:
        logger.warning(
            "GEMINI_API_KEY is not set. AI features will fail until it is configured."
        )
    yield


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(documents_router)
    app.include_router(ai_router)
    app.include_router(flashcards_router)
    app.include_router(quizzes_router)
    app.include_router(dashboard_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        logger.error(f"An error occurred when starting the server: {e}.")
