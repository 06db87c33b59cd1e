"""Command-line interface for ``integration-docs llm-write-docs``."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib import resources
from pathlib import Path
from typing import Optional, Sequence

from integration_docs.core import workspace as workspace_mod
from integration_docs.core.ai import ConfigError
from integration_docs.core.logging import configure_logger
from integration_docs.core.packages import ManifestError, find_package_root
from integration_docs.core.workspace import WorkspaceError

from .client import GenerationError, OpenAIGenerationClient
from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    WriteDocsConfigError,
    load_config,
)
from .runner import write_docs
from .schema import SECTION_NAMES, DecodeError
from .writer import SectionWriteError, read_section

TEMPLATE_RESOURCE = "template.toml"
LOGGER_NAME = "integration_docs.write_docs"

PACKAGE_ROOT_NOT_FOUND = (
    "package root not found, you can only author documentation in the "
    "package context"
)

_PIPELINE_ERRORS = (
    ConfigError,
    ManifestError,
    GenerationError,
    DecodeError,
    SectionWriteError,
)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="integration-docs llm-write-docs",
        description=(
            "Write the overview and setup sections for the current package "
            "using an LLM. Sections are saved under "
            "_dev/build/docs/sections/ in the package root."
        ),
        epilog=(
            "Run `integration-docs llm-write-docs config init` to scaffold "
            "the default write_docs.toml template."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "Path to a TOML config file (defaults to the workspace config "
            "directory)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config and logs.",
    )
    parser.add_argument("--model", help="Chat model to generate with.")
    parser.add_argument(
        "--max-tokens",
        type=int,
        help="Maximum tokens the model may generate.",
    )
    parser.add_argument(
        "--temperature",
        type=float,
        help="Sampling temperature.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for the model before giving up.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log records to stderr.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args_list = list(argv) if argv is not None else list(sys.argv[1:])

    if args_list[:1] == ["config"]:
        return _handle_config(args_list[1:])

    parser = build_arg_parser()
    args = parser.parse_args(args_list)

    overrides = ConfigOverrides(
        model=args.model,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
        timeout=args.timeout,
        log_level=args.log_level,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except WriteDocsConfigError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 2

    sys.stdout.write("Write documentation for the package using LLM\n")

    package_root = find_package_root()
    if package_root is None:
        sys.stderr.write(f"Error: {PACKAGE_ROOT_NOT_FOUND}\n")
        return 1

    logger, log_path = configure_logger(
        LOGGER_NAME,
        log_dir=load_result.layout.path_for("logs"),
        level=load_result.config.log_level,
        verbose=args.verbose,
    )
    logger.debug(
        "llm-write-docs invoked",
        extra={
            "package_root": package_root,
            "config_path": load_result.config_path,
        },
    )

    try:
        client = _build_client(logger)
        result = write_docs(
            package_root,
            client=client,
            params=load_result.config.params,
            logger=logger,
        )
    except _PIPELINE_ERRORS as exc:
        logger.error("llm-write-docs failed", exc_info=True)
        sys.stderr.write(f"Error: {exc}\n")
        sys.stderr.write(f"See log file: {log_path}\n")
        return 1

    sys.stdout.write(f"Overview successfully written to {result.overview}\n")
    sys.stdout.write(f"Setup successfully written to {result.setup}\n")
    sys.stdout.write("Done\n")
    return 0


def _build_client(logger: logging.Logger) -> OpenAIGenerationClient:
    return OpenAIGenerationClient(logger=logger)


def show_main(argv: Optional[Sequence[str]] = None) -> int:
    """Print a previously generated section of the current package."""

    parser = argparse.ArgumentParser(
        prog="integration-docs show-section",
        description="Print a generated documentation section.",
    )
    parser.add_argument("SECTION", choices=SECTION_NAMES)
    args = parser.parse_args(list(argv) if argv is not None else None)

    package_root = find_package_root()
    if package_root is None:
        sys.stderr.write(f"Error: {PACKAGE_ROOT_NOT_FOUND}\n")
        return 1

    try:
        body = read_section(package_root, args.SECTION)
    except SectionWriteError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    sys.stdout.write(body if body.endswith("\n") else body + "\n")
    return 0


def _handle_config(argv: Sequence[str]) -> int:
    parser = _build_config_parser()
    args = parser.parse_args(argv)

    if args.command == "init":
        return _handle_config_init(args)

    parser.error(f"Unsupported config command '{args.command}'.")
    return 2  # pragma: no cover - argparse.error exits before here


def _build_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="integration-docs llm-write-docs config",
        description="Manage configuration files for llm-write-docs.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Write the default write_docs.toml template.",
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Destination for the config TOML (defaults to the workspace "
            "config directory)."
        ),
    )
    init_parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root override used to resolve the default path.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if a config already exists.",
    )
    return parser


def _handle_config_init(args: argparse.Namespace) -> int:
    try:
        target = _resolve_config_target(args)
    except WorkspaceError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    if target.exists() and not args.force:
        sys.stderr.write(
            f"Error: Config already exists: {target} (use --force to "
            "overwrite)\n"
        )
        return 1

    body = (
        resources.files("integration_docs.write_docs")
        .joinpath(TEMPLATE_RESOURCE)
        .read_text(encoding="utf-8")
    )
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(body, encoding="utf-8")
        target.chmod(0o600)
    except OSError as exc:
        sys.stderr.write(f"Error: failed to write config {target}: {exc}\n")
        return 1

    sys.stdout.write(f"Wrote llm-write-docs config to {target}\n")
    return 0


def _resolve_config_target(args: argparse.Namespace) -> Path:
    if args.path is not None:
        candidate = args.path.expanduser()
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        return candidate

    layout = workspace_mod.ensure_workspace(path=args.workspace)
    return layout.path_for("config") / CONFIG_FILENAME


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
