from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from studyai.core.config import settings
from studyai.core.errors import GenerationFormatError, StudyAIError
from studyai.modules.documents import PdfExtractionError, extract_pdf_text
from studyai.modules.study import prompts
from studyai.modules.study.extraction import extract_json_array
from studyai.modules.study.gateway import ModelGateway
from studyai.modules.study.models import DEFAULT_QUESTION_COUNT, TaskKind
from studyai.modules.study.validation import parse_flashcards, parse_quiz_questions


def _load_text(path: str) -> str:
    p = Path(path)
    if p.suffix.lower() == ".pdf":
        return extract_pdf_text(p.read_bytes())
    return p.read_text(encoding="utf-8")


def _require_answer(output: str) -> str:
    if not output.strip():
        raise GenerationFormatError("AI returned an empty response. Please try again.")
    return output


async def _run(args: argparse.Namespace, text: str) -> object:
    gateway = ModelGateway(settings.gemini_api_key, model_name=settings.gemini_model)
    kind = TaskKind(args.cmd)
    if kind is TaskKind.CHAT:
        answer = await gateway.generate_text(
            prompts.CHAT_SYSTEM_PROMPT, prompts.chat_payload(text, args.message)
        )
        return {"answer": _require_answer(answer)}
    if kind is TaskKind.SUMMARY:
        summary = await gateway.generate_text(
            prompts.SUMMARY_SYSTEM_PROMPT, prompts.document_payload(text)
        )
        return {"summary": _require_answer(summary)}
    if kind is TaskKind.EXPLAIN:
        explanation = await gateway.generate_text(
            prompts.EXPLAIN_SYSTEM_PROMPT, prompts.explain_payload(text, args.concept)
        )
        return {"explanation": _require_answer(explanation)}
    if kind is TaskKind.FLASHCARDS:
        raw = await gateway.generate_text(
            prompts.FLASHCARDS_SYSTEM_PROMPT, prompts.document_payload(text)
        )
        return [c.model_dump() for c in parse_flashcards(extract_json_array(raw))]
    raw = await gateway.generate_text(
        prompts.QUIZ_SYSTEM_PROMPT, prompts.quiz_payload(text, args.question_count)
    )
    return [q.to_record() for q in parse_quiz_questions(extract_json_array(raw))]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="studyai-gen", description="Generate study material from a local file"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    for kind in TaskKind:
        p = sub.add_parser(kind.value, help=f"Run the {kind.value} task")
        p.add_argument("--file", "-f", required=True, help="PDF or text file")
        if kind is TaskKind.CHAT:
            p.add_argument("--message", "-m", required=True, help="Question to ask")
        if kind is TaskKind.EXPLAIN:
            p.add_argument("--concept", "-c", required=True, help="Concept to explain")
        if kind is TaskKind.QUIZ:
            p.add_argument(
                "--question-count", type=int, default=DEFAULT_QUESTION_COUNT
            )

    args = parser.parse_args(argv)
    try:
        text = _load_text(args.file)
    except (PdfExtractionError, OSError, UnicodeDecodeError) as e:
        parser.exit(1, f"Could not read {args.file}: {e}\n")
    if not text.strip():
        parser.exit(1, "No text could be extracted from the file\n")
    try:
        result = asyncio.run(_run(args, text))
    except StudyAIError as e:
        parser.exit(1, f"{e.kind.value}: {e.message}\n")
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
