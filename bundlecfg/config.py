from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_PREFIX = "BUNDLECFG_"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BundleCfgSettings(BaseSettings):
    log_level: str = "INFO"
    json_logs: bool = False
    strict_identity: bool = False
    """Reject manifests that carry both StoreID and HomebrewID."""

    model_config = SettingsConfigDict(
        env_prefix=_ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return normalized


def _coerce_env_value(value: str) -> object:
    parsed = yaml.safe_load(value)
    return value if parsed is None else parsed


def _apply_env_overrides(data: dict[str, object]) -> dict[str, object]:
    merged = dict(data)
    for key, raw_value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        merged[key[len(_ENV_PREFIX) :].lower()] = _coerce_env_value(raw_value)
    return merged


def load_config(path: str | Path = "config/bundlecfg.yaml") -> BundleCfgSettings:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError("config file must contain a top-level mapping")

    raw = loaded.get("bundlecfg", loaded)
    if not isinstance(raw, dict):
        raise ValueError("bundlecfg config section must be a mapping")

    return BundleCfgSettings.model_validate(_apply_env_overrides(raw))


__all__ = ["BundleCfgSettings", "load_config"]
