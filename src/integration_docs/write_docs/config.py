"""Configuration loader for the llm-write-docs workflow."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from integration_docs.core import workspace as workspace_mod

from .client import DEFAULT_MODEL, GenerationParams

CONFIG_FILENAME = "write_docs.toml"
CONFIG_ENV = "INTEGRATION_DOCS_WRITE_DOCS_CONFIG"
ENV_PREFIX = "INTEGRATION_DOCS_WRITE_DOCS_"

_DEFAULT_LOG_LEVEL = "INFO"


class WriteDocsConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class WriteDocsConfig:
    """Fully resolved configuration for a documentation run."""

    params: GenerationParams
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    timeout: Optional[float] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    """Result of loading configuration, including workspace context."""

    config: WriteDocsConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise WriteDocsConfigError(str(exc)) from exc
    default_path = layout.path_for("config") / CONFIG_FILENAME

    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=default_path,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        loaded_path = requested_path
        _apply_file(table, _read_toml(requested_path))
    elif config_path is not None or env_map.get(CONFIG_ENV, "").strip():
        raise WriteDocsConfigError(f"Config file not found: {requested_path}")

    model_table = table["model"]
    params = GenerationParams(
        model=_require_string(
            "model.name",
            _pick_first(
                overrides.model,
                _parse_env_string(env_map, "MODEL"),
                model_table["name"],
            ),
        ),
        max_tokens=_require_int(
            "model.max_tokens",
            _pick_first(
                overrides.max_tokens,
                _parse_env_number(env_map, "MAX_TOKENS", int),
                model_table["max_tokens"],
            ),
            minimum=1,
        ),
        temperature=_require_float(
            "model.temperature",
            _pick_first(
                overrides.temperature,
                _parse_env_number(env_map, "TEMPERATURE", float),
                model_table["temperature"],
            ),
            low=0.0,
            high=2.0,
        ),
        top_p=_require_float(
            "model.top_p", model_table["top_p"], low=0.0, high=1.0
        ),
        top_k=_require_int("model.top_k", model_table["top_k"], minimum=0),
        timeout=_require_float(
            "model.timeout",
            _pick_first(
                overrides.timeout,
                _parse_env_number(env_map, "TIMEOUT", float),
                model_table["timeout"],
            ),
            low=0.0,
            exclusive_low=True,
        ),
    )

    log_level = _require_string(
        "logging.level",
        _pick_first(
            overrides.log_level,
            _parse_env_string(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        ),
    ).upper()

    return LoadResult(
        config=WriteDocsConfig(params=params, log_level=log_level),
        layout=layout,
        config_path=loaded_path,
    )


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    defaults = GenerationParams()
    return {
        "model": {
            "name": DEFAULT_MODEL,
            "max_tokens": defaults.max_tokens,
            "temperature": defaults.temperature,
            "top_p": defaults.top_p,
            "top_k": defaults.top_k,
            "timeout": defaults.timeout,
        },
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise WriteDocsConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise WriteDocsConfigError(
            f"Failed to parse config TOML {path}: {exc}"
        ) from exc


def _apply_file(
    table: MutableMapping[str, MutableMapping[str, Any]],
    document: Mapping[str, Any],
) -> None:
    """Copy ``[model]``/``[logging]`` values from the file onto ``table``.

    Only the two known tables and their known keys are accepted.
    """

    for section, values in document.items():
        if section not in table:
            raise WriteDocsConfigError(
                f"Unknown configuration key '{section}'."
            )
        if not isinstance(values, Mapping):
            raise WriteDocsConfigError(
                f"Expected table for '{section}', "
                f"found {type(values).__name__}."
            )
        known = table[section]
        for key, value in values.items():
            if key not in known:
                raise WriteDocsConfigError(
                    f"Unknown configuration key '{section}.{key}'."
                )
            known[key] = value


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = env_map.get(CONFIG_ENV, "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _require_string(key: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise WriteDocsConfigError(f"{key} must be a non-empty string.")
    return value.strip()


def _require_int(key: str, value: object, *, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise WriteDocsConfigError(f"{key} must be an integer.")
    if value < minimum:
        raise WriteDocsConfigError(f"{key} must be >= {minimum}.")
    return value


def _require_float(
    key: str,
    value: object,
    *,
    low: float,
    high: Optional[float] = None,
    exclusive_low: bool = False,
) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WriteDocsConfigError(f"{key} must be a number.")
    number = float(value)
    if number < low or (exclusive_low and number == low):
        bound = ">" if exclusive_low else ">="
        raise WriteDocsConfigError(f"{key} must be {bound} {low}.")
    if high is not None and number > high:
        raise WriteDocsConfigError(f"{key} must be <= {high}.")
    return number


def _parse_env_number(env_map: Mapping[str, str], key: str, kind: type) -> Any:
    raw = _parse_env_string(env_map, key)
    if raw is None:
        return None
    try:
        return kind(raw)
    except ValueError as exc:
        raise WriteDocsConfigError(
            f"{ENV_PREFIX}{key} must be a valid {kind.__name__}, got '{raw}'."
        ) from exc


def _parse_env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
