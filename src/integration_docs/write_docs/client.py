"""Generation client seam between the pipeline and the model backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from integration_docs.core import load_client

from .prompt import build_messages

__all__ = [
    "DEFAULT_MODEL",
    "GenerationClient",
    "GenerationError",
    "GenerationParams",
    "OpenAIGenerationClient",
]

DEFAULT_MODEL = "gpt-4o-mini"


class GenerationError(RuntimeError):
    """Raised when the model call fails or returns nothing usable."""


@dataclass(frozen=True)
class GenerationParams:
    """Model identifier and sampling parameters for one generation call.

    Defaults favour deterministic, low-creativity output.
    """

    model: str = DEFAULT_MODEL
    max_tokens: int = 1500
    temperature: float = 0.1
    top_p: float = 1.0
    top_k: int = 100
    timeout: float = 120.0


class GenerationClient(Protocol):
    """Anything that turns a prompt into raw generated text."""

    def generate(self, prompt: str, *, params: GenerationParams) -> str:
        ...


class OpenAIGenerationClient:
    """Generation client backed by the OpenAI chat completions API."""

    def __init__(
        self,
        client: Any = None,
        *,
        client_factory: Optional[Callable[[], Any]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if client is None:
            # ConfigError from the factory propagates before any request.
            client = (client_factory or load_client)()
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    def generate(self, prompt: str, *, params: GenerationParams) -> str:
        request = {
            "model": params.model,
            "messages": build_messages(prompt),
            "temperature": params.temperature,
            "top_p": params.top_p,
            "timeout": params.timeout,
        }
        if "gpt-5" in params.model:
            request["max_completion_tokens"] = params.max_tokens
        else:
            request["max_tokens"] = params.max_tokens
        # Chat completions has no top-k sampling control.
        self._logger.debug(
            "Requesting generation",
            extra={
                "model": params.model,
                "max_tokens": params.max_tokens,
                "top_k_ignored": params.top_k,
            },
        )

        try:
            response = self._client.chat.completions.create(**request)
        except Exception as exc:
            raise GenerationError(f"failed to generate content: {exc}") from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise GenerationError("empty response from model")
        content = (choices[0].message.content or "").strip()
        if not content:
            raise GenerationError(
                "model returned empty content; check API key/model and prompt"
            )
        return content
