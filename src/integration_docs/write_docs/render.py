"""Render structured sections into markdown."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional

from .schema import (
    SECTION_NAMES,
    RenderedDocument,
    Section,
    Sentence,
    SentenceType,
    StructuredDocument,
)

__all__ = [
    "ESCAPED_NEWLINE",
    "format_timestamp",
    "render_document",
    "render_section",
    "render_sentence",
    "timestamp_comment",
]

ESCAPED_NEWLINE = "\\n"

_FRAGMENTS: Dict[SentenceType, Callable[[str], str]] = {
    SentenceType.BOLD: lambda content: f"\n**{content}**\n",
    SentenceType.PARAGRAPH: lambda content: f"\n{content}\n",
    SentenceType.LIST_ITEM: lambda content: f"- {content}\n",
    SentenceType.CODE_BLOCK: lambda content: f"```\n{content}\n```\n\n",
}


def _plain_line(content: str) -> str:
    return f"{content}\n\n"


def render_sentence(sentence: Sentence) -> str:
    """Return the markdown fragment for a single sentence."""

    fragment = _FRAGMENTS.get(sentence.type, _plain_line)
    return fragment(sentence.content)


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as an RFC 3339 timestamp with second precision."""

    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.isoformat(timespec="seconds")


def timestamp_comment(moment: datetime) -> str:
    return f"\n\n<!-- Generated on: {format_timestamp(moment)} -->"


def render_section(
    section: Section,
    *,
    generated_at: datetime,
    logger: Optional[logging.Logger] = None,
    name: str = "",
) -> str:
    """Render ``section`` in sequence order and append the timestamp."""

    if logger is not None and not _is_ordered(section):
        logger.warning(
            "Section sentences are out of declared order; "
            "rendering in response order",
            extra={
                "section": name,
                "orders": [sentence.order for sentence in section],
            },
        )
    body = "".join(render_sentence(sentence) for sentence in section)
    body = body.replace(ESCAPED_NEWLINE, "\n")
    return body + timestamp_comment(generated_at)


def render_document(
    doc: StructuredDocument,
    *,
    generated_at: Optional[datetime] = None,
    logger: Optional[logging.Logger] = None,
) -> RenderedDocument:
    """Render both sections of ``doc`` sharing one generation timestamp."""

    moment = generated_at or datetime.now().astimezone()
    rendered = {
        name: render_section(
            doc.section(name),
            generated_at=moment,
            logger=logger,
            name=name,
        )
        for name in SECTION_NAMES
    }
    return RenderedDocument(**rendered)


def _is_ordered(section: Iterable[Sentence]) -> bool:
    orders = [sentence.order for sentence in section]
    return all(left <= right for left, right in zip(orders, orders[1:]))
