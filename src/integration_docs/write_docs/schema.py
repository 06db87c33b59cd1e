"""Structured document model and the decoder for model responses.

The model is asked to answer with a JSON object of the form::

    {
      "overview": [{"order": 1, "content": "...", "type": "paragraph"}],
      "setup": [{"order": 1, "content": "...", "type": "list_item"}]
    }

``decode_response`` turns that text into a :class:`StructuredDocument`.
Missing keys fall back to zero values; values of the wrong JSON kind are
rejected with :class:`DecodeError`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple

__all__ = [
    "PREVIEW_CHARS",
    "SECTION_NAMES",
    "DecodeError",
    "RenderedDocument",
    "Section",
    "Sentence",
    "SentenceType",
    "StructuredDocument",
    "decode_response",
    "preview",
]

SECTION_NAMES: Tuple[str, ...] = ("overview", "setup")

# Longest stretch of model output quoted in error messages and logs.
PREVIEW_CHARS = 500


class DecodeError(ValueError):
    """Raised when generated text does not match the response schema.

    ``raw_text`` keeps the untouched model output for diagnosis; the
    message only quotes its first ``PREVIEW_CHARS`` characters.
    """

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(
            f"failed to unmarshal response: {message}. "
            f"Content: {preview(raw_text)}"
        )
        self.reason = message
        self.raw_text = raw_text


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    """Return ``text`` cut to ``limit`` characters with a length note."""

    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text) - limit} more characters)"


class SentenceType(Enum):
    """Rendering types a sentence may declare."""

    BOLD = "bold"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: str) -> "SentenceType":
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class Sentence:
    """One unit of generated content."""

    order: int
    content: str
    type: SentenceType
    raw_type: str = ""


Section = Tuple[Sentence, ...]


@dataclass(frozen=True)
class StructuredDocument:
    overview: Section = ()
    setup: Section = ()

    def section(self, name: str) -> Section:
        if name not in SECTION_NAMES:
            raise KeyError(f"Unknown section '{name}'.")
        return getattr(self, name)


@dataclass(frozen=True)
class RenderedDocument:
    overview: str
    setup: str

    def section(self, name: str) -> str:
        if name not in SECTION_NAMES:
            raise KeyError(f"Unknown section '{name}'.")
        return getattr(self, name)


def decode_response(raw_text: str) -> StructuredDocument:
    """Parse model output into a :class:`StructuredDocument`."""

    candidate = _strip_code_fence(raw_text)
    try:
        payload = json.loads(candidate)
    except (json.JSONDecodeError, TypeError) as exc:
        raise DecodeError(str(exc), raw_text) from exc

    if not isinstance(payload, Mapping):
        raise DecodeError(
            f"expected a JSON object, found {_kind(payload)}", raw_text
        )

    sections = {
        name: _decode_section(name, payload.get(name), raw_text)
        for name in SECTION_NAMES
    }
    return StructuredDocument(**sections)


def _decode_section(name: str, value: Any, raw_text: str) -> Section:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise DecodeError(
            f"'{name}' must be an array, found {_kind(value)}", raw_text
        )
    return tuple(
        _decode_sentence(f"{name}[{index}]", item, raw_text)
        for index, item in enumerate(value)
    )


def _decode_sentence(where: str, value: Any, raw_text: str) -> Sentence:
    if not isinstance(value, Mapping):
        raise DecodeError(
            f"'{where}' must be an object, found {_kind(value)}", raw_text
        )

    order = value.get("order", 0)
    if order is None:
        order = 0
    # bool is an int subclass; JSON true/false is not a valid order.
    if isinstance(order, bool) or not isinstance(order, int):
        raise DecodeError(
            f"'{where}.order' must be an integer, found {_kind(order)}",
            raw_text,
        )

    content = _string_value(where, value, "content", raw_text)
    raw_type = _string_value(where, value, "type", raw_text)

    return Sentence(
        order=order,
        content=content,
        type=SentenceType.from_value(raw_type),
        raw_type=raw_type,
    )


def _string_value(
    where: str, value: Mapping[str, Any], key: str, raw_text: str
) -> str:
    item = value.get(key)
    if item is None:
        return ""
    if not isinstance(item, str):
        raise DecodeError(
            f"'{where}.{key}' must be a string, found {_kind(item)}",
            raw_text,
        )
    return item


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    if not stripped.startswith("```") or not stripped.endswith("```"):
        return text
    body = stripped[3:-3]
    # Drop an info string such as ``json`` on the opening fence line.
    first_line, sep, rest = body.partition("\n")
    if sep and not first_line.strip().startswith(("{", "[")):
        body = rest
    return body.strip()


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__
