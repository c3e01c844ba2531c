from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from .schema import Settings

DEFAULT_CONFIG_PATH = Path("config/default.yaml")
OVERRIDES_ENV_VAR = "QUIZ_ENGINE_CONFIG_OVERRIDES"


def read_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping; a blank file counts as an empty mapping."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {path} is not valid YAML.") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level.")
    return data


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``; nested mappings merge key by key."""
    merged = {**base}
    for key, value in override.items():
        current = merged.get(key)
        both_mappings = isinstance(current, dict) and isinstance(value, dict)
        merged[key] = merge_dicts(current, value) if both_mappings else value
    return merged


def _resolve_relative_paths(settings: Settings, root: Path) -> Settings:
    """Anchor subject and progress paths to the directory holding the config file."""
    for subject in settings.subjects:
        if not subject.path.is_absolute():
            subject.path = root / subject.path
    if not settings.paths.progress_file.is_absolute():
        settings.paths.progress_file = root / settings.paths.progress_file
    return settings


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    Read configuration, apply environment overrides, and return validated Settings.

    Loads the YAML file via `read_yaml`, merges any JSON-specified overrides from
    `QUIZ_ENGINE_CONFIG_OVERRIDES` using `merge_dicts`, and validates the resulting
    payload against the `Settings` schema. Relative paths are resolved against the
    parent of the config directory, so `config/default.yaml` refers to `data/...`
    at the project root.
    """

    config_file = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    data = read_yaml(config_file)

    overrides_env = os.getenv(OVERRIDES_ENV_VAR)
    if overrides_env:
        try:
            overrides = json.loads(overrides_env)
        except json.JSONDecodeError as err:
            raise ValueError(
                f"Failed to parse {OVERRIDES_ENV_VAR} env var as JSON."
            ) from err
        data = merge_dicts(data, overrides)

    try:
        settings = Settings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc

    return _resolve_relative_paths(settings, config_file.resolve().parent.parent)
