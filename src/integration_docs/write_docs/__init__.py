"""LLM-assisted section writer: prompt, client, decoder, renderer, writer."""

from .cli import build_arg_parser, main, show_main
from .client import (
    GenerationClient,
    GenerationError,
    GenerationParams,
    OpenAIGenerationClient,
)
from .config import ConfigOverrides, WriteDocsConfigError, load_config
from .prompt import build_messages, build_prompt
from .render import render_document, render_section, render_sentence
from .runner import write_docs
from .schema import (
    DecodeError,
    RenderedDocument,
    Sentence,
    SentenceType,
    StructuredDocument,
    decode_response,
)
from .writer import SectionWriteError, WriteResult, read_section, write_sections

__all__ = [
    "ConfigOverrides",
    "DecodeError",
    "GenerationClient",
    "GenerationError",
    "GenerationParams",
    "OpenAIGenerationClient",
    "RenderedDocument",
    "SectionWriteError",
    "Sentence",
    "SentenceType",
    "StructuredDocument",
    "WriteDocsConfigError",
    "WriteResult",
    "build_arg_parser",
    "build_messages",
    "build_prompt",
    "decode_response",
    "load_config",
    "main",
    "read_section",
    "render_document",
    "render_section",
    "render_sentence",
    "show_main",
    "write_docs",
    "write_sections",
]
