"""OpenAI session setup shared by generation commands."""

from __future__ import annotations

import os
from typing import Any, Mapping

from dotenv import load_dotenv

try:  # Allow module import even when the OpenAI dependency is absent.
    from openai import OpenAI  # type: ignore
except Exception:  # pragma: no cover - optional dependency guard
    OpenAI = None  # type: ignore

__all__ = ["API_KEY_ENV", "BASE_URL_ENV", "ConfigError", "load_client"]

API_KEY_ENV = "OPENAI_API_KEY"
BASE_URL_ENV = "OPENAI_BASE_URL"


class ConfigError(RuntimeError):
    """Raised when the model client cannot be configured."""


def load_client(env: Mapping[str, str] | None = None) -> Any:
    """Initialize an OpenAI client using environment-derived credentials.

    Nothing is sent to the service here; failures surface before the first
    request is made.
    """
    if OpenAI is None:
        raise ConfigError(
            "The 'openai' package is required to create a client. "
            "Install it and retry."
        )
    if env is None:
        load_dotenv()
        env = os.environ
    api_key = (env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigError(
            f"{API_KEY_ENV} not found in environment. Set it or add to .env"
        )
    kwargs: dict[str, Any] = {"api_key": api_key}
    base_url = (env.get(BASE_URL_ENV) or "").strip()
    if base_url:
        kwargs["base_url"] = base_url
    try:
        return OpenAI(**kwargs)
    except Exception as exc:
        raise ConfigError(f"Unable to initialize OpenAI client: {exc}") from exc
