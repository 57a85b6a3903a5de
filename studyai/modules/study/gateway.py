"""Gemini text gateway built on pydantic-ai.

The gateway sends a system instruction plus a user payload and returns the
raw text. It makes exactly one model request per call. Imports for the Google
provider are kept lazy so the module imports cleanly when credentials (or the
provider extra) are missing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol

from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior

from studyai.core.errors import GenerationFormatError, ServiceUnavailableError
from studyai.core.logging import get_logger

if TYPE_CHECKING:
    from pydantic_ai.models import Model


MODEL_NAME = "gemini-2.5-flash"

MISSING_KEY_MESSAGE = (
    "Gemini API key is not set. Add GEMINI_API_KEY to the environment and restart the server."
)
INVALID_KEY_MESSAGE = (
    "Gemini API key is invalid or missing. Add a valid GEMINI_API_KEY to the environment "
    "and restart the server."
)

EMPTY_REPLY_MESSAGE = "AI returned an empty response. Please try again."

_INVALID_KEY_MARKERS = ("API_KEY_INVALID", "API key not valid")

ModelBuilder = Callable[[str, str], "Model"]

logger = get_logger(__name__)


class TextGenerator(Protocol):
    async def generate_text(self, system_prompt: str, user_prompt: str) -> str: ...


def _build_google_model(api_key: str, model_name: str) -> "Model":
    """Build the Google Gemini model provider (lazy import)."""
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    provider = GoogleProvider(api_key=api_key)
    return GoogleModel(model_name, provider=provider)


def is_credential_error(exc: ModelHTTPError) -> bool:
    if exc.status_code in (401, 403):
        return True
    if exc.status_code != 400:
        return False
    haystack = f"{exc.message} {exc.body!s}"
    return any(marker in haystack for marker in _INVALID_KEY_MARKERS)


class ModelGateway:
    """Single-shot text generation against the configured Gemini model."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model_name: str = MODEL_NAME,
        model_builder: Optional[ModelBuilder] = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self._model_builder = model_builder or _build_google_model

    def _build_agent(self, system_prompt: str) -> Agent[None, str]:
        # key is checked per call, not at construction
        if not self.api_key:
            raise ServiceUnavailableError(MISSING_KEY_MESSAGE)
        model = self._model_builder(self.api_key, self.model_name)
        return Agent[None, str](
            model,
            output_type=str,
            system_prompt=system_prompt,
            retries=0,
            output_retries=0,
        )

    async def generate_text(self, system_prompt: str, user_prompt: str) -> str:
        if not system_prompt or not user_prompt:
            raise ValueError("system_prompt and user_prompt must be non-empty")
        agent = self._build_agent(system_prompt)
        try:
            res = await agent.run(user_prompt)
        except ModelHTTPError as e:
            if is_credential_error(e):
                logger.warning(
                    "Gemini rejected the configured credential (status %s)", e.status_code
                )
                raise ServiceUnavailableError(INVALID_KEY_MESSAGE) from e
            raise
        except UnexpectedModelBehavior as e:
            # empty or unusable reply, surfaced without asking the model again
            logger.warning("Gemini returned an unusable reply: %s", e)
            raise GenerationFormatError(EMPTY_REPLY_MESSAGE) from e
        return res.output


__all__ = [
    "MODEL_NAME",
    "TextGenerator",
    "ModelGateway",
    "is_credential_error",
]
