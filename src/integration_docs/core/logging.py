"""JSON-lines run logging for integration-docs commands."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

__all__ = [
    "JsonLogFormatter",
    "configure_logger",
]

LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 3

# Handlers created here carry this attribute set to "file" or "console".
_ROLE = "integration_docs_role"

_STANDARD_ATTRS = frozenset(
    vars(logging.makeLogRecord({}))
) | {"message", "asctime", "taskName"}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields land under ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra = {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS
        }
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=True)


def configure_logger(
    name: str,
    *,
    log_dir: Path,
    level: str = "INFO",
    verbose: bool = False,
) -> tuple[logging.Logger, Path]:
    """Attach a rotating JSON file handler under ``log_dir``.

    The file is named after the last dotted part of ``name``. Calling this
    again swaps the handlers instead of stacking them. With ``verbose`` the
    file records everything and a plain stderr handler is added.
    """

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{name.rsplit('.', 1)[-1]}.log"

    _drop_handlers(logger, "file")
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG if verbose else _level_number(level))
    file_handler.setFormatter(JsonLogFormatter())
    setattr(file_handler, _ROLE, "file")
    logger.addHandler(file_handler)

    _drop_handlers(logger, "console")
    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        setattr(console, _ROLE, "console")
        logger.addHandler(console)

    return logger, log_path


def _drop_handlers(logger: logging.Logger, role: str) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _ROLE, None) == role:
            logger.removeHandler(handler)
            handler.close()


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(item) for item in value]
    return repr(value)
