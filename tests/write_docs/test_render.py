from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from integration_docs.write_docs import render
from integration_docs.write_docs.schema import (
    Sentence,
    SentenceType,
    StructuredDocument,
)

MOMENT = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)
COMMENT = "\n\n<!-- Generated on: 2024-05-01T12:30:00+00:00 -->"


def _sentence(content: str, kind: str, order: int = 1) -> Sentence:
    return Sentence(
        order=order,
        content=content,
        type=SentenceType.from_value(kind),
        raw_type=kind,
    )


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("bold", "\n**Heading**\n"),
        ("paragraph", "\nHeading\n"),
        ("list_item", "- Heading\n"),
        ("code_block", "```\nHeading\n```\n\n"),
        ("unknown", "Heading\n\n"),
        ("table", "Heading\n\n"),
    ],
)
def test_render_sentence_fragments(kind: str, expected: str) -> None:
    assert render.render_sentence(_sentence("Heading", kind)) == expected


def test_empty_section_renders_only_timestamp() -> None:
    assert render.render_section((), generated_at=MOMENT) == COMMENT


def test_render_section_concatenates_in_sequence_order() -> None:
    section = (
        _sentence("Intro", "bold", order=2),
        _sentence("Body", "paragraph", order=1),
        _sentence("Item", "list_item", order=3),
    )

    rendered = render.render_section(section, generated_at=MOMENT)

    assert rendered == "\n**Intro**\n\nBody\n- Item\n" + COMMENT


def test_render_replaces_escaped_newlines() -> None:
    section = (_sentence("line one\\nline two", "code_block"),)

    rendered = render.render_section(section, generated_at=MOMENT)

    assert rendered.startswith("```\nline one\nline two\n```\n\n")
    assert "\\n" not in rendered


def test_render_document_is_deterministic() -> None:
    doc = StructuredDocument(
        overview=(_sentence("Overview text", "paragraph"),),
        setup=(_sentence("Step one", "list_item"),),
    )

    first = render.render_document(doc, generated_at=MOMENT)
    second = render.render_document(doc, generated_at=MOMENT)

    assert first == second
    assert first.overview == "\nOverview text\n" + COMMENT
    assert first.setup == "- Step one\n" + COMMENT


def test_render_document_defaults_to_current_time() -> None:
    rendered = render.render_document(StructuredDocument())

    assert rendered.overview.startswith("\n\n<!-- Generated on: ")
    assert rendered.overview == rendered.setup


def test_format_timestamp_keeps_offset() -> None:
    tz = timezone(timedelta(hours=-5))
    moment = datetime(2024, 1, 2, 3, 4, 5, 678, tzinfo=tz)

    assert render.format_timestamp(moment) == "2024-01-02T03:04:05-05:00"


def test_format_timestamp_localizes_naive_datetimes() -> None:
    stamp = render.format_timestamp(datetime(2024, 1, 2, 3, 4, 5))

    assert stamp.startswith("2024-01-02T03:04:05")
    assert stamp[19] in "+-"


def test_out_of_order_section_logs_warning(caplog) -> None:
    logger = logging.getLogger("integration_docs.test_render")
    section = (
        _sentence("b", "paragraph", order=2),
        _sentence("a", "paragraph", order=1),
    )

    with caplog.at_level(logging.WARNING, logger=logger.name):
        rendered = render.render_section(
            section, generated_at=MOMENT, logger=logger, name="overview"
        )

    assert rendered.startswith("\nb\n\na\n")
    assert "out of declared order" in caplog.text
    assert caplog.records[0].orders == [2, 1]


def test_ordered_section_does_not_warn(caplog) -> None:
    logger = logging.getLogger("integration_docs.test_render_ordered")
    section = (
        _sentence("a", "paragraph", order=1),
        _sentence("b", "paragraph", order=1),
        _sentence("c", "paragraph", order=4),
    )

    with caplog.at_level(logging.WARNING, logger=logger.name):
        render.render_section(section, generated_at=MOMENT, logger=logger)

    assert not caplog.records
