from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Ensure src/ is importable when the project is not installed.
ROOT = TESTS_DIR.parent
SRC = str(ROOT / "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from fixtures import PackageBuilder  # noqa: E402

MANAGED_LOGGERS = ("integration_docs.write_docs",)


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Point the workspace at tmp and drop env overrides from the host."""

    monkeypatch.setenv("INTEGRATION_DOCS_DATA_HOME", str(tmp_path / "data"))
    for key in list(os.environ):
        if key.startswith("INTEGRATION_DOCS_WRITE_DOCS_"):
            monkeypatch.delenv(key, raising=False)
    yield
    for name in MANAGED_LOGGERS:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


@pytest.fixture
def packages(tmp_path: Path) -> PackageBuilder:
    """Build integration package trees under the per-test tmp directory."""

    return PackageBuilder(tmp_path / "packages")


@pytest.fixture
def package_root(packages: PackageBuilder) -> Path:
    return packages.create("bitwarden")
