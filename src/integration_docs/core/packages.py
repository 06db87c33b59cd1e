"""Locate integration packages and read their manifests."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

__all__ = [
    "MANIFEST_FILENAME",
    "ManifestError",
    "PackageManifest",
    "find_package_root",
    "read_manifest",
]

MANIFEST_FILENAME = "manifest.yml"


class ManifestError(RuntimeError):
    """Raised when a package root or its manifest cannot be resolved."""


@dataclass(frozen=True)
class PackageManifest:
    """The subset of ``manifest.yml`` the documentation tooling relies on."""

    name: str
    title: str = ""
    version: str = ""
    description: str = ""
    type: str = ""


def find_package_root(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start`` (default: cwd) to the nearest package root.

    A package root is a directory holding a ``manifest.yml`` file. Returns
    ``None`` when the filesystem root is reached without a match.
    """

    current = (start or Path.cwd()).expanduser().resolve()
    for candidate in (current, *current.parents):
        if (candidate / MANIFEST_FILENAME).is_file():
            return candidate
    return None


def read_manifest(package_root: Path) -> PackageManifest:
    """Parse ``manifest.yml`` under ``package_root``."""

    path = Path(package_root) / MANIFEST_FILENAME
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ManifestError(f"Package manifest not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ManifestError(
            f"Failed to parse package manifest {path}: {exc}"
        ) from exc

    if not isinstance(raw, Mapping):
        raise ManifestError(f"Package manifest is not a mapping: {path}")

    name = _string_field(raw, "name")
    if not name:
        raise ManifestError(f"Package manifest has no name: {path}")

    return PackageManifest(
        name=name,
        title=_string_field(raw, "title"),
        version=_string_field(raw, "version"),
        description=_string_field(raw, "description"),
        type=_string_field(raw, "type"),
    )


def _string_field(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return str(value).strip()
