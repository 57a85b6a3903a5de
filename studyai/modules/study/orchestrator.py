"""Generation orchestrator: document text + task kind -> study artifact.

Each call is an independent run through

    fetching document -> prompting model -> validating -> persisting -> done

where the last two steps only apply to structured tasks (flashcards, quiz)
and ``failed`` is reachable from every step. Preconditions are checked before
the model is contacted, and nothing is written until validation has accepted
the whole batch.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from studyai.core.db.schemas.documents import StudyDocument
from studyai.core.db.schemas.study import Flashcard, Quiz
from studyai.core.db_services import DocumentStore, FlashcardStore, QuizStore
from studyai.core.errors import (
    GenerationFormatError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    StudyAIError,
)
from studyai.core.logging import bind_context, get_logger
from studyai.modules.study import prompts
from studyai.modules.study.extraction import extract_json_array
from studyai.modules.study.gateway import TextGenerator
from studyai.modules.study.models import (
    DEFAULT_QUESTION_COUNT,
    GenerationState,
    GenerationTask,
    TaskKind,
)
from studyai.modules.study.validation import parse_flashcards, parse_quiz_questions


T = TypeVar("T")

logger = get_logger(__name__)


class _Run:
    """Tracks the state of one generation call for logging."""

    def __init__(self, kind: TaskKind, owner_id: int, document_id: int) -> None:
        self.kind = kind
        self.state = GenerationState.FETCHING_DOCUMENT
        self.log = bind_context(logger, user_id=owner_id, document_id=document_id)
        self.log.debug("%s: %s", kind.value, self.state.value)

    def enter(self, state: GenerationState) -> None:
        self.log.debug("%s: %s -> %s", self.kind.value, self.state.value, state.value)
        self.state = state

    def fail(self, exc: Exception) -> None:
        self.log.warning(
            "%s failed while %s: %s", self.kind.value, self.state.value, exc
        )
        self.state = GenerationState.FAILED


class GenerationOrchestrator:
    """Runs chat/summary/explain/flashcards/quiz tasks for a single owner."""

    def __init__(
        self,
        gateway: TextGenerator,
        documents: DocumentStore,
        flashcards: FlashcardStore,
        quizzes: QuizStore,
    ) -> None:
        self.gateway = gateway
        self.documents = documents
        self.flashcards = flashcards
        self.quizzes = quizzes

    @classmethod
    def for_session(
        cls, session: AsyncSession, gateway: TextGenerator
    ) -> "GenerationOrchestrator":
        return cls(
            gateway,
            DocumentStore(session),
            FlashcardStore(session),
            QuizStore(session),
        )

    async def run(self, owner_id: int, task: GenerationTask) -> Any:
        """Dispatch a ``GenerationTask`` to the matching operation."""
        if task.kind is TaskKind.CHAT:
            return await self.chat(owner_id, task.document_id, task.message or "")
        if task.kind is TaskKind.SUMMARY:
            return await self.summarize(owner_id, task.document_id)
        if task.kind is TaskKind.EXPLAIN:
            return await self.explain(owner_id, task.document_id, task.concept or "")
        if task.kind is TaskKind.FLASHCARDS:
            return await self.generate_flashcards(owner_id, task.document_id)
        return await self.generate_quiz(
            owner_id, task.document_id, question_count=task.question_count
        )

    # -- prose tasks ------------------------------------------------------

    async def chat(self, owner_id: int, document_id: int, message: str) -> dict[str, str]:
        answer = await self._prose(
            TaskKind.CHAT,
            owner_id,
            document_id,
            prompts.CHAT_SYSTEM_PROMPT,
            lambda text: prompts.chat_payload(text, message),
        )
        return {"answer": answer}

    async def summarize(self, owner_id: int, document_id: int) -> dict[str, str]:
        summary = await self._prose(
            TaskKind.SUMMARY,
            owner_id,
            document_id,
            prompts.SUMMARY_SYSTEM_PROMPT,
            prompts.document_payload,
        )
        return {"summary": summary}

    async def explain(
        self, owner_id: int, document_id: int, concept: str
    ) -> dict[str, str]:
        explanation = await self._prose(
            TaskKind.EXPLAIN,
            owner_id,
            document_id,
            prompts.EXPLAIN_SYSTEM_PROMPT,
            lambda text: prompts.explain_payload(text, concept),
        )
        return {"explanation": explanation}

    # -- structured tasks -------------------------------------------------

    async def generate_flashcards(
        self, owner_id: int, document_id: int
    ) -> list[Flashcard]:
        run = _Run(TaskKind.FLASHCARDS, owner_id, document_id)
        try:
            doc, text = await self._fetch_document(owner_id, document_id)
            run.enter(GenerationState.PROMPTING_MODEL)
            raw = await self._generate(
                prompts.FLASHCARDS_SYSTEM_PROMPT, prompts.document_payload(text)
            )
            run.enter(GenerationState.VALIDATING)
            drafts = parse_flashcards(extract_json_array(raw))
            run.enter(GenerationState.PERSISTING)
            created = await self._persist(
                self.flashcards.insert_batch,
                [
                    Flashcard(
                        owner_id=owner_id,
                        document_id=doc.id,
                        front=d.front,
                        back=d.back,
                        is_favorite=False,
                    )
                    for d in drafts
                ],
            )
        except Exception as e:
            run.fail(e)
            raise
        run.enter(GenerationState.DONE)
        run.log.info("Generated %d flashcards", len(created))
        return created

    async def generate_quiz(
        self,
        owner_id: int,
        document_id: int,
        question_count: int = DEFAULT_QUESTION_COUNT,
    ) -> Quiz:
        run = _Run(TaskKind.QUIZ, owner_id, document_id)
        try:
            doc, text = await self._fetch_document(owner_id, document_id)
            run.enter(GenerationState.PROMPTING_MODEL)
            raw = await self._generate(
                prompts.QUIZ_SYSTEM_PROMPT, prompts.quiz_payload(text, question_count)
            )
            run.enter(GenerationState.VALIDATING)
            questions = parse_quiz_questions(extract_json_array(raw))
            run.enter(GenerationState.PERSISTING)
            quiz = await self._persist(
                self.quizzes.insert_one,
                Quiz(
                    owner_id=owner_id,
                    document_id=doc.id,
                    questions=[q.to_record() for q in questions],
                ),
            )
        except Exception as e:
            run.fail(e)
            raise
        run.enter(GenerationState.DONE)
        run.log.info(
            "Generated quiz %s with %d questions (asked for %d)",
            quiz.id,
            len(questions),
            question_count,
        )
        return quiz

    # -- steps ------------------------------------------------------------

    async def _prose(
        self,
        kind: TaskKind,
        owner_id: int,
        document_id: int,
        system_prompt: str,
        build_payload: Callable[[str], str],
    ) -> str:
        run = _Run(kind, owner_id, document_id)
        try:
            _, text = await self._fetch_document(owner_id, document_id)
            run.enter(GenerationState.PROMPTING_MODEL)
            output = await self._generate(system_prompt, build_payload(text))
            if not output or not output.strip():
                raise GenerationFormatError(
                    "AI returned an empty response. Please try again."
                )
        except Exception as e:
            run.fail(e)
            raise
        run.enter(GenerationState.DONE)
        return output

    async def _fetch_document(
        self, owner_id: int, document_id: int
    ) -> tuple[StudyDocument, str]:
        doc = await self.documents.find_owned_document(owner_id, document_id)
        if doc is None:
            raise NotFoundError("Document not found")
        text = doc.text_content
        if not text or not text.strip():
            raise InvalidStateError("Document text not available")
        return doc, text

    async def _generate(self, system_prompt: str, user_prompt: str) -> str:
        try:
            return await self.gateway.generate_text(system_prompt, user_prompt)
        except StudyAIError:
            raise
        except Exception as e:
            raise InternalError(f"AI request failed: {e}") from e

    async def _persist(
        self, write: Callable[[T], Awaitable[Any]], payload: T
    ) -> Any:
        try:
            return await write(payload)
        except StudyAIError:
            raise
        except Exception as e:
            raise InternalError(f"Failed to save generated records: {e}") from e


__all__ = ["GenerationOrchestrator"]
