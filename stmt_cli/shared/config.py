"""Configuration loading utilities for the statement normalizer."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class InputSettings:
    """How statement files are read."""

    encoding: str
    delimiter: str  # "auto" or a single character


@dataclass(frozen=True, slots=True)
class OutputSettings:
    """Where converted statements are written."""

    directory: Path


@dataclass(frozen=True, slots=True)
class PatternSettings:
    """Extra header keywords per semantic field."""

    extra: Mapping[str, tuple[str, ...]]
    replace_defaults: bool


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    input: InputSettings
    output: OutputSettings
    patterns: PatternSettings


def _default_config() -> dict[str, Any]:
    return {
        "input": {
            "encoding": "utf-8-sig",
            "delimiter": "auto",
        },
        "output": {
            "directory": paths.DEFAULT_OUTPUT_DIR,
        },
        "patterns": {
            "replace_defaults": False,
        },
    }


ENV_OVERRIDE_SPEC: dict[str, tuple[str, type]] = {
    "input.encoding": ("STMTNORM_INPUT_ENCODING", str),
    "input.delimiter": ("STMTNORM_INPUT_DELIMITER", str),
    "output.directory": ("STMTNORM_OUTPUT_DIR", str),
    "patterns.replace_defaults": ("STMTNORM_PATTERNS_REPLACE_DEFAULTS", bool),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(os.environ if env is None else env)
    resolved_config_path = _resolve_config_path(config_path, env)
    if config_path and not resolved_config_path.exists():
        raise ConfigurationError(f"Config file not found: {resolved_config_path}")
    file_data = _load_yaml(resolved_config_path)
    merged: dict[str, Any] = _deep_merge(_default_config(), file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(config_path: str | Path | None, env: Mapping[str, str]) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file at {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})
    for dotted_key, (env_key, expected_type) in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        raw_value = env[env_key]
        try:
            value = _coerce_env_value(raw_value, expected_type)
        except ValueError as exc:
            raise ConfigurationError(
                f"Environment override {env_key} has invalid value '{raw_value}': {exc}"
            ) from exc
        _assign_nested(config_copy, dotted_key.split("."), value)
    return config_copy


def _coerce_env_value(raw: str, expected_type: type) -> Any:
    cleaned = raw.strip()
    if expected_type is bool:
        lowered = cleaned.lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        raise ValueError("expected boolean (true/false)")
    return cleaned


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _parse_encoding(raw: Any) -> str:
    value = str(raw).strip()
    try:
        codecs.lookup(value)
    except LookupError:
        raise ValueError(f"unknown input.encoding '{value}'") from None
    return value


def _parse_delimiter(raw: Any) -> str:
    value = str(raw)
    if value.lower() == "auto":
        return "auto"
    if value in {"\\t", "tab"}:
        return "\t"
    if len(value) != 1:
        raise ValueError(f"input.delimiter must be 'auto' or a single character, got '{value}'")
    return value


def _parse_pattern_extras(data: Mapping[str, Any]) -> dict[str, tuple[str, ...]]:
    extras: dict[str, tuple[str, ...]] = {}
    for key, value in data.items():
        if key == "replace_defaults":
            continue
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"patterns.{key} must be a list of keywords")
        keywords = tuple(str(item).strip().lower() for item in value if str(item).strip())
        extras[str(key)] = keywords
    return extras


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        input_settings = InputSettings(
            encoding=_parse_encoding(data["input"]["encoding"]),
            delimiter=_parse_delimiter(data["input"]["delimiter"]),
        )
        output_settings = OutputSettings(
            directory=paths.resolve_path(str(data["output"]["directory"])),
        )
        patterns_cfg = data["patterns"] or {}
        pattern_settings = PatternSettings(
            extra=_parse_pattern_extras(patterns_cfg),
            replace_defaults=bool(patterns_cfg.get("replace_defaults", False)),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    return AppConfig(
        source_path=source_path,
        input=input_settings,
        output=output_settings,
        patterns=pattern_settings,
    )
