"""Closed error taxonomy for the study service and its HTTP mapping.

Every failure raised by the generation pipeline is a ``StudyAIError`` subclass
carrying an ``ErrorKind``. The transport layer turns the kind into a status
code through ``STATUS_BY_KIND``; nothing else inspects exception types.
"""

from __future__ import annotations

import enum

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from studyai.core.logging import get_logger


logger = get_logger(__name__)


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    SERVICE_UNAVAILABLE = "service_unavailable"
    GENERATION_FORMAT = "generation_format"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.GENERATION_FORMAT: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class StudyAIError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class NotFoundError(StudyAIError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Document not found"


class InvalidStateError(StudyAIError):
    kind = ErrorKind.INVALID_STATE
    default_message = "Document text not available"


class ServiceUnavailableError(StudyAIError):
    kind = ErrorKind.SERVICE_UNAVAILABLE
    default_message = "AI service is not available"


class GenerationFormatError(StudyAIError):
    """The model answered, but not in a shape we can use. Safe to retry."""

    kind = ErrorKind.GENERATION_FORMAT
    default_message = "Failed to parse structured output from AI. Please try generating again."


class InternalError(StudyAIError):
    kind = ErrorKind.INTERNAL


async def _handle_study_error(_request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StudyAIError)
    if exc.kind is ErrorKind.INTERNAL:
        logger.error("Unhandled study error: %s", exc.message, exc_info=exc)
    else:
        logger.warning("%s: %s", exc.kind.value, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind.value},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StudyAIError, _handle_study_error)


__all__ = [
    "ErrorKind",
    "STATUS_BY_KIND",
    "StudyAIError",
    "NotFoundError",
    "InvalidStateError",
    "ServiceUnavailableError",
    "GenerationFormatError",
    "InternalError",
    "register_exception_handlers",
]
