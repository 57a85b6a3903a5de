import json

import pytest
from pydantic_ai.messages import ModelResponse, TextPart
from pydantic_ai.models.function import FunctionModel
from sqlalchemy import func, select

from studyai.core.db.schemas.study import Flashcard, Quiz
from studyai.core.db_services import QuizStore
from studyai.core.errors import (
    GenerationFormatError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    ServiceUnavailableError,
)
from studyai.modules.study import prompts
from studyai.modules.study.gateway import ModelGateway
from studyai.modules.study.orchestrator import GenerationOrchestrator
from studyai.modules.study.models import GenerationTask, TaskKind


QUIZ_OUTPUT = json.dumps(
    [
        {
            "question": "What does photosynthesis convert?",
            "options": ["Light to energy", "Water to salt", "Heat to ice", "Sound to light"],
            "correctIndex": 0,
            "explanation": "Stated directly in the text.",
        }
    ]
)


def _task(kind: TaskKind, document_id: int) -> GenerationTask:
    return GenerationTask(
        kind=kind,
        document_id=document_id,
        message="What is photosynthesis?",
        concept="photosynthesis",
        question_count=5,
    )


async def _count(session, model) -> int:
    return (await session.execute(select(func.count(model.id)))).scalar()


@pytest.mark.parametrize("kind", list(TaskKind))
@pytest.mark.parametrize("text", [None, "", "   \n"])
async def test_missing_text_fails_before_model_call(
    kind, text, orchestrator, gateway, make_document, user
):
    doc = await make_document(user, text=text)

    with pytest.raises(InvalidStateError):
        await orchestrator.run(user.id, _task(kind, doc.id))

    assert gateway.calls == []


@pytest.mark.parametrize("kind", list(TaskKind))
async def test_unknown_document_is_not_found(kind, orchestrator, gateway, user):
    with pytest.raises(NotFoundError):
        await orchestrator.run(user.id, _task(kind, 9999))
    assert gateway.calls == []


@pytest.mark.parametrize("kind", list(TaskKind))
async def test_other_users_document_is_not_found(
    kind, orchestrator, gateway, make_document, user, other_user
):
    foreign = await make_document(other_user)

    with pytest.raises(NotFoundError):
        await orchestrator.run(user.id, _task(kind, foreign.id))
    assert gateway.calls == []


async def test_summary_returns_model_text(orchestrator, gateway, document, user):
    gateway.output = "Plants use light to make energy."

    result = await orchestrator.summarize(user.id, document.id)

    assert result == {"summary": "Plants use light to make energy."}
    system_prompt, user_prompt = gateway.calls[0]
    assert system_prompt == prompts.SUMMARY_SYSTEM_PROMPT
    assert "Photosynthesis converts light to energy." in user_prompt


async def test_chat_passes_question_and_returns_answer(
    orchestrator, gateway, document, user
):
    gateway.output = "It turns light into chemical energy."

    result = await orchestrator.chat(user.id, document.id, "What is photosynthesis?")

    assert result == {"answer": "It turns light into chemical energy."}
    assert "User question: What is photosynthesis?" in gateway.calls[0][1]


async def test_explain_includes_concept(orchestrator, gateway, document, user):
    gateway.output = "Step 1: light hits the leaf."

    result = await orchestrator.explain(user.id, document.id, "chlorophyll")

    assert result == {"explanation": "Step 1: light hits the leaf."}
    assert "Concept to explain: chlorophyll" in gateway.calls[0][1]


async def test_empty_prose_answer_is_a_format_error(orchestrator, gateway, document, user):
    gateway.output = "   "
    with pytest.raises(GenerationFormatError):
        await orchestrator.summarize(user.id, document.id)


async def test_empty_model_reply_is_a_format_error_after_one_request(
    session, document, user
):
    requests = []

    def _reply(messages, info):
        requests.append(messages)
        return ModelResponse(parts=[TextPart(content="")])

    gateway = ModelGateway("key", model_builder=lambda *_: FunctionModel(_reply))
    orchestrator = GenerationOrchestrator.for_session(session, gateway)

    with pytest.raises(GenerationFormatError):
        await orchestrator.summarize(user.id, document.id)
    assert len(requests) == 1


async def test_flashcards_are_persisted_for_owner_and_document(
    orchestrator, gateway, session, document, user
):
    gateway.output = 'Here you go:\n[{"front":"Q1","back":"A1"},{"front":"Q2","back":"A2"}]'

    cards = await orchestrator.generate_flashcards(user.id, document.id)

    assert [(c.front, c.back) for c in cards] == [("Q1", "A1"), ("Q2", "A2")]
    rows = (await session.execute(select(Flashcard))).scalars().all()
    assert len(rows) == 2
    for row in rows:
        assert row.owner_id == user.id
        assert row.document_id == document.id
        assert row.is_favorite is False
        assert row.created_at is not None
    assert gateway.calls[0][0] == prompts.FLASHCARDS_SYSTEM_PROMPT


async def test_flashcard_count_is_not_enforced(orchestrator, gateway, document, user):
    gateway.output = json.dumps([{"front": f"Q{i}", "back": f"A{i}"} for i in range(3)])
    cards = await orchestrator.generate_flashcards(user.id, document.id)
    assert len(cards) == 3


async def test_malformed_flashcard_persists_nothing(
    orchestrator, gateway, session, document, user
):
    gateway.output = '[{"front":"Q1","back":"A1"},{"front":"Q2"}]'

    with pytest.raises(GenerationFormatError):
        await orchestrator.generate_flashcards(user.id, document.id)

    assert await _count(session, Flashcard) == 0


async def test_regenerating_flashcards_keeps_previous_batch(
    orchestrator, gateway, session, document, user
):
    gateway.output = '[{"front":"Q1","back":"A1"},{"front":"Q2","back":"A2"}]'

    await orchestrator.generate_flashcards(user.id, document.id)
    await orchestrator.generate_flashcards(user.id, document.id)

    assert await _count(session, Flashcard) == 4


async def test_malformed_quiz_output_persists_nothing(
    orchestrator, gateway, session, document, user
):
    gateway.output = "not json"

    with pytest.raises(GenerationFormatError) as exc:
        await orchestrator.generate_quiz(user.id, document.id)

    assert "parse" in exc.value.message
    assert await _count(session, Quiz) == 0


async def test_quiz_is_persisted_with_question_count_hint(
    orchestrator, gateway, document, user
):
    gateway.output = f"Sure!\n{QUIZ_OUTPUT}\nGood luck."

    quiz = await orchestrator.generate_quiz(user.id, document.id, question_count=7)

    assert quiz.owner_id == user.id
    assert quiz.document_id == document.id
    assert quiz.questions == [
        {
            "question": "What does photosynthesis convert?",
            "options": ["Light to energy", "Water to salt", "Heat to ice", "Sound to light"],
            "correctIndex": 0,
            "explanation": "Stated directly in the text.",
        }
    ]
    assert gateway.calls[0][1].startswith("Question count: 7\n")


async def test_generating_quiz_twice_keeps_both_and_latest_is_second(
    orchestrator, gateway, session, document, user
):
    gateway.output = QUIZ_OUTPUT

    first = await orchestrator.generate_quiz(user.id, document.id)
    second = await orchestrator.generate_quiz(user.id, document.id)

    assert first.id != second.id
    assert await _count(session, Quiz) == 2
    latest = await QuizStore(session).find_latest_by_document(user.id, document.id)
    assert latest.id == second.id


async def test_latest_quiz_is_owner_scoped(
    orchestrator, gateway, session, document, user, other_user
):
    gateway.output = QUIZ_OUTPUT
    await orchestrator.generate_quiz(user.id, document.id)

    assert await QuizStore(session).find_latest_by_document(other_user.id, document.id) is None


async def test_service_unavailable_passes_through(orchestrator, gateway, document, user):
    gateway.error = ServiceUnavailableError("Gemini API key is not set.")

    with pytest.raises(ServiceUnavailableError):
        await orchestrator.generate_flashcards(user.id, document.id)


async def test_unexpected_backend_error_becomes_internal_error(
    orchestrator, gateway, session, document, user
):
    boom = RuntimeError("connection reset")
    gateway.error = boom

    with pytest.raises(InternalError) as exc:
        await orchestrator.generate_quiz(user.id, document.id)

    assert exc.value.__cause__ is boom
    assert await _count(session, Quiz) == 0


async def test_run_dispatches_by_task_kind(orchestrator, gateway, document, user):
    gateway.output = "An explanation."
    result = await orchestrator.run(
        user.id,
        GenerationTask(kind=TaskKind.EXPLAIN, document_id=document.id, concept="light"),
    )
    assert result == {"explanation": "An explanation."}
