"""YAML defaults plus ``EMAILSHIELD_*`` environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import BaseModel, Field

from emailshield.core.errors import ConfigError

PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_DIR / "config" / "defaults.yaml"
ENV_PREFIX = "EMAILSHIELD_"

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


class AppConfig(BaseModel):
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="plain")
    seed_history: bool = Field(default=True)
    max_results: int = Field(default=200, gt=0)
    max_history: int = Field(default=500, gt=0)
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000, gt=0)
    ui_host: str = Field(default="127.0.0.1")
    ui_port: int = Field(default=7860, gt=0)
    report_dir: str = Field(default="reports")
    config_path: str = Field(default=str(DEFAULT_CONFIG_PATH))


def load_yaml(path: str | Path) -> dict[str, Any]:
    source = Path(path)
    if not source.is_file():
        return {}
    try:
        with source.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid config file {source}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _env(key: str) -> str | None:
    value = os.environ.get(ENV_PREFIX + key.upper())
    return value if value else None


def _as_positive_int(raw: Any, fallback: int) -> int:
    if isinstance(raw, bool):
        return fallback
    try:
        number = int(str(raw).strip())
    except (TypeError, ValueError):
        return fallback
    return number if number > 0 else fallback


def _as_flag(raw: Any, fallback: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    word = str(raw).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return fallback


def _as_text(raw: Any, fallback: str) -> str:
    text = "" if raw is None else str(raw).strip()
    return text or fallback


_COERCERS: dict[type, Callable[[Any, Any], Any]] = {
    bool: _as_flag,
    int: _as_positive_int,
    str: _as_text,
}
_NORMALISE: dict[str, Callable[[str], str]] = {
    "log_level": str.upper,
    "log_format": str.lower,
}


def _config_source(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    return Path(_env("config_path") or DEFAULT_CONFIG_PATH)


def load_config(path: str | Path | None = None) -> tuple[AppConfig, dict[str, Any]]:
    """Build the app config; env vars win over the YAML file.

    Values that do not parse fall back to the field default. Returns the
    config and the raw YAML mapping.
    """

    source = _config_source(path)
    raw = load_yaml(source)

    values: dict[str, Any] = {}
    for name, field in AppConfig.model_fields.items():
        if name == "config_path":
            continue
        default = field.default
        candidate = _env(name)
        if candidate is None:
            candidate = raw.get(name, default)
        value = _COERCERS[type(default)](candidate, default)
        if name in _NORMALISE:
            value = _NORMALISE[name](value)
        values[name] = value
    values["config_path"] = str(source)
    return AppConfig.model_validate(values), raw
