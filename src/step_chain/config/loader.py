from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from step_chain.config.models import BatchDefaults


class ConfigError(ValueError):
    # Raised for invalid configuration (fail fast).
    pass


def load_yaml_config(path: Path) -> dict[str, object]:
    # Returns the raw mapping; section validation happens in the typed loaders.
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def load_batch_defaults(path: Path) -> BatchDefaults:
    # The `batch` section is optional; missing keys keep the built-in defaults.
    raw = load_yaml_config(path)
    section = raw.get("batch", {})
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigError("batch must be a mapping")
    try:
        return BatchDefaults.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"Invalid batch config: {exc}") from exc
