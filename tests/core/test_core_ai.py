from __future__ import annotations

import pytest

from integration_docs.core import ai
from integration_docs.core.ai import ConfigError, load_client


def test_load_client_requires_openai_dependency(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(ai, "OpenAI", None)
    with pytest.raises(ConfigError) as exc:
        load_client({"OPENAI_API_KEY": "test-key"})
    assert "openai" in str(exc.value).lower()


def test_load_client_requires_api_key() -> None:
    with pytest.raises(ConfigError) as exc:
        load_client({"OPENAI_API_KEY": "  "})
    assert "OPENAI_API_KEY" in str(exc.value)


def test_load_client_reads_dotenv_and_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls = []
    monkeypatch.setattr(ai, "load_dotenv", lambda: calls.append(True))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ConfigError):
        load_client()
    assert calls == [True]


def test_load_client_passes_key_and_base_url(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    created = {}

    def fake_openai(**kwargs):
        created.update(kwargs)
        return "client"

    monkeypatch.setattr(ai, "OpenAI", fake_openai)
    client = load_client(
        {
            "OPENAI_API_KEY": "test-key",
            "OPENAI_BASE_URL": "http://localhost:8000/v1",
        }
    )
    assert client == "client"
    assert created == {
        "api_key": "test-key",
        "base_url": "http://localhost:8000/v1",
    }


def test_load_client_wraps_constructor_failures(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_openai(**kwargs):
        raise ValueError("bad base url")

    monkeypatch.setattr(ai, "OpenAI", broken_openai)
    with pytest.raises(ConfigError) as exc:
        load_client({"OPENAI_API_KEY": "test-key"})
    assert "bad base url" in str(exc.value)
    assert isinstance(exc.value.__cause__, ValueError)
