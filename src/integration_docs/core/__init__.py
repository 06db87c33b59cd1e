"""Core shared helpers for integration-docs subcommands."""

from __future__ import annotations

from .ai import ConfigError, load_client
from .logging import JsonLogFormatter, configure_logger
from .packages import (
    MANIFEST_FILENAME,
    ManifestError,
    PackageManifest,
    find_package_root,
    read_manifest,
)
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "ConfigError",
    "load_client",
    "configure_logger",
    "JsonLogFormatter",
    "MANIFEST_FILENAME",
    "ManifestError",
    "PackageManifest",
    "find_package_root",
    "read_manifest",
    "ensure_workspace",
    "WorkspaceLayout",
    "WorkspaceError",
    "WORKSPACE_ENV",
]
