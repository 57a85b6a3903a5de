from __future__ import annotations

import time
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from studyai.apis.deps import CurrentUser, Session
from studyai.core.config import settings
from studyai.core.db_services import DocumentStore
from studyai.core.logging import bind_context, get_logger
from studyai.modules.documents import PdfExtractionError, extract_pdf_text
from .schemas import DocumentRead, DocumentSummary


router = APIRouter()

logger = get_logger(__name__)


def _storage_path(filename: str) -> Path:
    base = Path(settings.storage.upload_dir)
    base.mkdir(parents=True, exist_ok=True)
    safe_name = Path(filename).name or "upload.pdf"
    return base / f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_name}"


@router.post(
    f"/{settings.app.version}/documents/upload",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
    tags=["documents"],
)
async def upload_document(
    user: CurrentUser,
    session: Session,
    file: UploadFile = File(...),
    title: Optional[str] = Form(default=None),
) -> DocumentRead:
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(data) > settings.storage.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {settings.storage.max_upload_size_mb} MB",
        )
    try:
        text = extract_pdf_text(data)
    except PdfExtractionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    original_name = file.filename or "upload.pdf"
    path = _storage_path(original_name)
    await run_in_threadpool(path.write_bytes, data)

    try:
        doc = await DocumentStore(session).create(
            owner_id=user.id,
            title=(title or "").strip() or original_name,
            original_file_name=original_name,
            storage_path=str(path),
            text_content=text or None,
        )
    except Exception:
        # no row points at the file, so it goes too
        path.unlink(missing_ok=True)
        raise
    bind_context(logger, user_id=user.id, document_id=doc.id).info(
        "Stored %s (%d bytes, %d characters of text)",
        original_name,
        len(data),
        len(text),
    )
    return DocumentRead.model_validate(doc)


@router.get(
    f"/{settings.app.version}/documents",
    response_model=list[DocumentSummary],
    tags=["documents"],
)
async def list_documents(user: CurrentUser, session: Session) -> list[DocumentSummary]:
    docs = await DocumentStore(session).list_for_owner(user.id)
    return [DocumentSummary.model_validate(d) for d in docs]


@router.get(
    f"/{settings.app.version}/documents/{{document_id:int}}",
    response_model=DocumentRead,
    tags=["documents"],
)
async def get_document(
    document_id: int, user: CurrentUser, session: Session
) -> DocumentRead:
    doc = await DocumentStore(session).find_owned_document(user.id, document_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")
    return DocumentRead.model_validate(doc)


@router.delete(
    f"/{settings.app.version}/documents/{{document_id:int}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["documents"],
)
async def delete_document(
    document_id: int, user: CurrentUser, session: Session
) -> Response:
    """Delete a document with its flashcards, quizzes and stored PDF."""
    store = DocumentStore(session)
    doc = await store.find_owned_document(user.id, document_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")

    stored = Path(doc.storage_path)
    await store.delete_with_artifacts(doc)
    try:
        stored.unlink(missing_ok=True)
    except OSError as e:
        # The rows are gone already; a leftover file is only logged
        logger.warning("Could not remove %s: %s", stored, e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
