"""Documentation generation pipeline.

prompt -> generate -> decode -> render -> write, strictly in sequence. The
first failing stage aborts the run; nothing is retried.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from integration_docs.core import read_manifest

from .client import GenerationClient, GenerationError, GenerationParams
from .prompt import build_prompt
from .render import render_document
from .schema import DecodeError, decode_response
from .writer import WriteResult, write_sections

__all__ = ["write_docs"]


def write_docs(
    package_root: Path,
    *,
    client: GenerationClient,
    params: Optional[GenerationParams] = None,
    package_name: Optional[str] = None,
    generated_at: Optional[datetime] = None,
    logger: Optional[logging.Logger] = None,
) -> WriteResult:
    """Generate both sections for the package at ``package_root``.

    ``package_name`` defaults to the ``name`` from the package manifest.
    Raises :class:`GenerationError`, ``DecodeError`` or
    ``SectionWriteError`` depending on the stage that failed.
    """

    log = logger or logging.getLogger(__name__)
    params = params or GenerationParams()
    if package_name is None:
        package_name = read_manifest(package_root).name

    prompt = build_prompt(package_name)
    log.info(
        "Generating documentation",
        extra={"package": package_name, "model": params.model},
    )

    try:
        raw_text = client.generate(prompt, params=params)
    except GenerationError as exc:
        raise GenerationError(
            f"failed to generate documentation content: {exc}"
        ) from exc
    log.debug("Generation finished", extra={"characters": len(raw_text)})

    try:
        document = decode_response(raw_text)
    except DecodeError as exc:
        log.error(
            "Response did not match schema",
            extra={"reason": exc.reason, "characters": len(raw_text)},
        )
        raise
    log.info(
        "Decoded response",
        extra={
            "overview_sentences": len(document.overview),
            "setup_sentences": len(document.setup),
        },
    )

    rendered = render_document(document, generated_at=generated_at, logger=log)
    return write_sections(package_root, rendered, logger=log)
