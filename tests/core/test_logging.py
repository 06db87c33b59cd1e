from __future__ import annotations

import json
import logging
from pathlib import Path

from integration_docs.core import logging as core_logging


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def _records(path: Path) -> list[dict]:
    return [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
    ]


def test_configure_logger_writes_json_with_extras(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "integration_docs.test_json",
        log_dir=tmp_path / "logs",
    )

    logger.info("hello world", extra={"section": "overview", "count": 3})
    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception(
            "with error",
            extra={"path": Path("/tmp/x"), "orders": (3, 1), "obj": object},
        )

    assert log_path == tmp_path / "logs" / "test_json.log"
    first, last = _records(log_path)
    assert first["message"] == "hello world"
    assert first["level"] == "INFO"
    assert first["logger"] == "integration_docs.test_json"
    assert first["extra"] == {"section": "overview", "count": 3}

    assert "ValueError: boom" in last["exception"]
    assert last["extra"]["path"] == "/tmp/x"
    assert last["extra"]["orders"] == [3, 1]
    assert last["extra"]["obj"] == repr(object)

    _close(logger)


def test_configure_logger_respects_level(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "integration_docs.test_level",
        log_dir=tmp_path,
        level="warning",
    )

    logger.info("dropped")
    logger.warning("kept")

    assert [entry["message"] for entry in _records(log_path)] == ["kept"]

    _close(logger)


def test_configure_logger_unknown_level_defaults_to_info(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "integration_docs.test_bogus",
        log_dir=tmp_path,
        level="bogus",
    )

    logger.debug("dropped")
    logger.info("kept")

    assert [entry["message"] for entry in _records(log_path)] == ["kept"]

    _close(logger)


def test_verbose_logs_debug_and_adds_one_console_handler(tmp_path, capsys):
    name = "integration_docs.test_toggle"

    def roles(logger):
        return sorted(
            getattr(handler, core_logging._ROLE, "")
            for handler in logger.handlers
        )

    logger, log_path = core_logging.configure_logger(
        name, log_dir=tmp_path, verbose=True
    )
    core_logging.configure_logger(name, log_dir=tmp_path, verbose=True)
    assert roles(logger) == ["console", "file"]

    logger.debug("detail")
    assert "DEBUG detail" in capsys.readouterr().err
    assert _records(log_path)[-1]["message"] == "detail"

    core_logging.configure_logger(name, log_dir=tmp_path, verbose=False)
    assert roles(logger) == ["file"]

    _close(logger)


def test_reconfiguring_moves_the_log_file(tmp_path):
    name = "integration_docs.test_move"

    logger, first = core_logging.configure_logger(
        name, log_dir=tmp_path / "one"
    )
    logger.info("first")
    logger, second = core_logging.configure_logger(
        name, log_dir=tmp_path / "two"
    )
    logger.info("second")

    assert [entry["message"] for entry in _records(first)] == ["first"]
    assert [entry["message"] for entry in _records(second)] == ["second"]
    assert len(logger.handlers) == 1

    _close(logger)
