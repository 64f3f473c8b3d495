"""Startup configuration: starting selection and logging."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE = Path.home() / ".parquet-probe.yaml"

ENV_VAR_MAP: dict[str, str] = {
    "PARQUET_PROBE_ROW_GROUP": "row_group",
    "PARQUET_PROBE_COLUMN": "column",
    "PARQUET_PROBE_LOG_FILE": "log_file",
}

INDEX_KEYS = ("row_group", "column")


@dataclass
class ProbeConfig:
    """Resolved startup configuration."""

    row_group: int = 0
    column: int = 0
    log_file: str | None = None


def load_config_file() -> dict[str, Any]:
    """Return the ``defaults`` mapping of ~/.parquet-probe.yaml, or {} if there is none."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ValueError(f"Config file {CONFIG_FILE} contains invalid YAML:\n  {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Config file {CONFIG_FILE} must be a YAML mapping, got {type(data).__name__}"
        )
    defaults = data.get("defaults", {})
    if not isinstance(defaults, dict):
        raise ValueError(f"'defaults' in {CONFIG_FILE} must be a mapping")
    return defaults


def _resolve_placeholders(value: str) -> str:
    """Expand ``${VAR_NAME}`` tokens in *value* using the environment."""

    def _replacer(match: re.Match[str]) -> str:
        var = match.group(1)
        env_val = os.environ.get(var)
        if env_val is None:
            raise ValueError(f"Environment variable ${{{var}}} referenced in config but not set")
        return env_val

    return re.sub(r"\$\{(\w+)\}", _replacer, value)


def _to_index(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    if isinstance(value, str):
        value = _resolve_placeholders(value).strip()
    try:
        index = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}") from None
    if index < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {index}")
    return index


def _apply_env_overrides(values: dict[str, Any]) -> dict[str, Any]:
    """Overlay environment variables onto file values."""
    for env_key, key in ENV_VAR_MAP.items():
        value = os.environ.get(env_key)
        if value:
            values[key] = value
    return values


def resolve_probe_config(
    row_group: int | None = None,
    column: int | None = None,
    log_file: str | None = None,
) -> ProbeConfig:
    """Resolve the configuration.

    Priority: CLI flags > env vars > ~/.parquet-probe.yaml > built-in defaults.
    """
    values = _apply_env_overrides(dict(load_config_file()))
    if row_group is not None:
        values["row_group"] = row_group
    if column is not None:
        values["column"] = column
    if log_file is not None:
        values["log_file"] = log_file

    config = ProbeConfig()
    for key in INDEX_KEYS:
        if key in values:
            setattr(config, key, _to_index(key, values[key]))
    if values.get("log_file"):
        config.log_file = _resolve_placeholders(str(values["log_file"]))
    return config


def setup_logging(log_file: str | None) -> None:
    """Send log records to *log_file*; without one, logging stays silent.

    The TUI owns the terminal, so nothing is ever logged to stderr.
    """
    if not log_file:
        logging.getLogger("parquet_probe").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
