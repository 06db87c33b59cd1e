"""Persist rendered sections inside an integration package."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .schema import SECTION_NAMES, RenderedDocument

__all__ = [
    "SectionWriteError",
    "WriteResult",
    "read_section",
    "section_path",
    "sections_dir",
    "write_sections",
]

SECTIONS_SUBDIR = ("_dev", "build", "docs", "sections")


class SectionWriteError(OSError):
    """Raised when a section directory or file cannot be written or read."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class WriteResult:
    """Absolute paths of the section files written by a run."""

    paths: Dict[str, Path]

    @property
    def overview(self) -> Path:
        return self.paths["overview"]

    @property
    def setup(self) -> Path:
        return self.paths["setup"]


def sections_dir(package_root: Path) -> Path:
    return Path(package_root).joinpath(*SECTIONS_SUBDIR)


def section_path(package_root: Path, name: str) -> Path:
    if name not in SECTION_NAMES:
        raise KeyError(f"Unknown section '{name}'.")
    return sections_dir(package_root) / f"generated_{name}.md"


def write_sections(
    package_root: Path,
    rendered: RenderedDocument,
    *,
    logger: Optional[logging.Logger] = None,
) -> WriteResult:
    """Write both rendered sections, replacing any previous content.

    Files are written one after the other; when the second write fails the
    first file is left in place.
    """

    target_dir = sections_dir(package_root).resolve()
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SectionWriteError(
            f"failed to create directory {target_dir}: {exc}", target_dir
        ) from exc

    written: Dict[str, Path] = {}
    for name in SECTION_NAMES:
        path = target_dir / f"generated_{name}.md"
        try:
            path.write_text(rendered.section(name), encoding="utf-8")
        except OSError as exc:
            raise SectionWriteError(
                f"failed to write {name} to {path}: {exc}", path
            ) from exc
        if logger is not None:
            logger.info(
                "Section written", extra={"section": name, "path": path}
            )
        written[name] = path
    return WriteResult(paths=written)


def read_section(package_root: Path, name: str) -> str:
    """Return the body of a previously generated section."""

    path = section_path(package_root, name)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SectionWriteError(
            f"reading section file failed (path: {path}): {exc}", path
        ) from exc
