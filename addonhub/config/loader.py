"""YAML configuration loader utilities."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from addonhub.config.models import AddonHubConfig


class ConfigLoadError(ValueError):
    """Raised when configuration YAML cannot be parsed or validated."""


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, value in updates.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce_env_value(raw: str) -> Any:
    value = raw.strip()
    if value.startswith("[") or value.startswith("{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _collect_env_overrides(prefix: str = "ADDONHUB_") -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key, raw_value in os.environ.items():
        if not key.startswith(prefix) or key == "ADDONHUB_CONFIG":
            continue
        path = [p.strip().lower() for p in key[len(prefix) :].split("__") if p.strip()]
        if not path:
            continue
        cursor = overrides
        for part in path[:-1]:
            existing = cursor.get(part)
            if not isinstance(existing, dict):
                existing = {}
                cursor[part] = existing
            cursor = existing
        cursor[path[-1]] = _coerce_env_value(raw_value)
    return overrides


class YAMLConfigLoader:
    """Load addonhub.yaml with deterministic path resolution."""

    DEFAULT_FILENAME = "addonhub.yaml"

    @classmethod
    def resolve_path(cls, cli_path: str | None = None) -> Path:
        """Resolve config path by priority: env -> cli -> cwd default."""
        env_path = os.environ.get("ADDONHUB_CONFIG", "").strip()
        if env_path:
            return Path(env_path)
        if cli_path and cli_path.strip():
            return Path(cli_path.strip())
        return Path.cwd() / cls.DEFAULT_FILENAME

    @classmethod
    def load_dict(cls, path: str | Path | None = None) -> dict[str, Any]:
        """Load YAML into dict. Missing or empty file yields empty dict."""
        target = Path(path) if path is not None else cls.resolve_path()
        if not target.exists():
            return {}
        text = target.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                raise ConfigLoadError(
                    f"Invalid YAML at {target}:{mark.line + 1}:{mark.column + 1}"
                ) from exc
            raise ConfigLoadError(f"Invalid YAML at {target}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config root must be mapping: {target}")
        return data


def load_config(path: str | Path | None = None) -> AddonHubConfig:
    """Load configuration: YAML file values, overridden by ADDONHUB_* environment variables."""
    target = Path(path) if path is not None else YAMLConfigLoader.resolve_path()
    merged = _deep_merge(YAMLConfigLoader.load_dict(target), _collect_env_overrides())
    try:
        return AddonHubConfig(**merged)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid configuration in {target}: {exc}") from exc
