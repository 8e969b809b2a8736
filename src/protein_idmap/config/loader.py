"""Layered configuration loading: YAML file, environment, CLI overrides."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import ValidationError

from protein_idmap.core.exceptions import ConfigurationError

from .models import AnnotationConfig

__all__ = ["ENV_PREFIX", "load_config", "parse_set_overrides"]

ENV_PREFIX = "PROTEIN_IDMAP__"


def load_config(
    config_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> AnnotationConfig:
    """Build an :class:`AnnotationConfig` from the configured layers.

    Layers are applied in order: model defaults, the YAML file at
    ``config_path``, ``PROTEIN_IDMAP__*`` environment variables and finally
    dotted ``cli_overrides`` such as ``{"mart.host": "https://..."}``.
    """

    payload: dict[str, Any] = {}
    if config_path is not None:
        payload = _load_yaml_mapping(_resolve_config_path(config_path))

    env_overrides = _collect_env_overrides(os.environ if env is None else env, prefix=ENV_PREFIX)
    if env_overrides:
        payload = _deep_merge(payload, env_overrides)

    if cli_overrides:
        pairs = [
            (tuple(dotted_key.split(".")), _coerce_value(raw_value))
            for dotted_key, raw_value in cli_overrides.items()
        ]
        payload = _deep_merge(payload, _build_tree(pairs))

    try:
        return AnnotationConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Configuration validation failed: {exc}") from exc


def parse_set_overrides(values: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings passed through ``--set``."""

    overrides: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(f"Invalid override {item!r}, expected KEY=VALUE")
        overrides[key] = value
    return overrides


def _resolve_config_path(config_path: str | Path) -> Path:
    path = Path(config_path).expanduser().resolve()
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")
    return path


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration root in {path} must be a mapping")
    return {str(key): value for key, value in data.items()}


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two mapping-like objects."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(
                cast(Mapping[str, Any], merged[key]),
                cast(Mapping[str, Any], value),
            )
        else:
            merged[key] = value
    return merged


def _build_tree(pairs: Iterable[tuple[Sequence[str], Any]]) -> dict[str, Any]:
    """Construct a nested mapping from path segments and values."""

    tree: dict[str, Any] = {}
    for parts, value in pairs:
        if not parts:
            continue
        current: MutableMapping[str, Any] = tree
        for part in parts[:-1]:
            existing = current.get(part)
            if not isinstance(existing, MutableMapping):
                existing = {}
                current[part] = existing
            current = existing
        current[parts[-1]] = value
    return tree


def _coerce_value(value: Any) -> Any:
    """Best-effort conversion of CLI/environment override values."""
    if isinstance(value, str):
        try:
            parsed = yaml.safe_load(value)
        except yaml.YAMLError:
            return value
        # Numeric scalars stay strings; pydantic coerces them per field type.
        if isinstance(parsed, (bool, Mapping, list)) or parsed is None:
            return parsed
        return value
    return value


def _collect_env_overrides(env: Mapping[str, str], *, prefix: str) -> dict[str, Any]:
    """Collect prefixed environment variables into a nested override tree."""
    pairs: list[tuple[Sequence[str], Any]] = []
    for key, raw_value in env.items():
        if not key.startswith(prefix):
            continue
        parts = [segment.strip().lower() for segment in key[len(prefix) :].split("__") if segment.strip()]
        if parts:
            pairs.append((tuple(parts), _coerce_value(raw_value)))
    return _build_tree(pairs)
