"""Shared testing fixtures and doubles for the integration_docs suite."""

from .generation import (  # noqa: F401
    FakeOpenAI,
    StubGenerationClient,
    sentences_payload,
)
from .workspace import PackageBuilder, build_tree  # noqa: F401

__all__ = [
    "FakeOpenAI",
    "PackageBuilder",
    "StubGenerationClient",
    "build_tree",
    "sentences_payload",
]
