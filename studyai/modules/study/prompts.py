"""System instructions and user payloads for each task kind."""

from __future__ import annotations


FLASHCARD_COUNT_HINT = 15

CHAT_SYSTEM_PROMPT = (
    "You are a helpful study assistant. Answer questions using ONLY the document "
    "text provided. If the document does not contain the answer, say so."
)

SUMMARY_SYSTEM_PROMPT = (
    "Summarize the following document into a concise, student-friendly study "
    "summary with headings and bullet points."
)

EXPLAIN_SYSTEM_PROMPT = (
    "Explain the requested concept in a clear, step-by-step way suitable for a "
    "student, referencing only the provided document."
)

FLASHCARDS_SYSTEM_PROMPT = (
    "You are a JSON API. Extract key concepts from the document and return "
    f"EXACTLY {FLASHCARD_COUNT_HINT} Q/A flashcards as a JSON array ONLY, no markdown, "
    "no prose, no explanations. The JSON format must be: "
    '[{ "front": "question", "back": "answer" }]. '
    "Do NOT include any other keys, and do NOT include any text before or after the JSON."
)

QUIZ_SYSTEM_PROMPT = (
    "You are a JSON API. Generate a multiple-choice quiz and return JSON ONLY, as an "
    'array of objects: { "question": string, "options": string[4], '
    '"correctIndex": number, "explanation": string }. '
    "Each question has EXACTLY 4 options and correctIndex is a 0-based index into "
    "options. Do NOT include any keys other than these, and do NOT include any text "
    "before or after the JSON array."
)


def document_payload(text: str) -> str:
    return f"Document text:\n{text}"


def chat_payload(text: str, message: str) -> str:
    return f"{document_payload(text)}\n\nUser question: {message}"


def explain_payload(text: str, concept: str) -> str:
    return f"{document_payload(text)}\n\nConcept to explain: {concept}"


def quiz_payload(text: str, question_count: int) -> str:
    return f"Question count: {int(question_count)}\n{document_payload(text)}"
