"""Configuration loading with CLI > ENV > file > defaults precedence."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Mapping

from normal_reference.exceptions import ConfigValidationError
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="config")

ENV_PREFIX = "NREF_"


def load_config_file(path: Path | str) -> dict[str, Any]:
    """Read a JSON or YAML mapping from ``path``."""
    path = Path(path)
    if not path.exists():
        raise ConfigValidationError(f"Config file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            content = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(f"Invalid JSON in {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        import yaml

        try:
            content = yaml.safe_load(path.read_text())
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc
    else:
        raise ConfigValidationError("Config file must be JSON or YAML")

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping")
    return content


def _cast(key: str, value: Any, casters: Mapping[str, Callable[[Any], Any]]) -> Any:
    caster = casters.get(key)
    if caster is None or value is None:
        return value
    try:
        return caster(value)
    except (TypeError, ValueError) as exc:
        raise ConfigValidationError(f"Invalid value for {key}: {value!r}") from exc


def load_config_with_precedence(
    *,
    config_path: Path | str | None,
    env_prefix: str = ENV_PREFIX,
    cli_values: Mapping[str, Any],
    defaults: Mapping[str, Any],
    casters: Mapping[str, Callable[[Any], Any]] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Merge configuration sources for the keys of ``defaults``.

    A key takes the first non-None value from: ``cli_values``, the environment
    variable ``{env_prefix}{KEY}``, the config file, then ``defaults``.
    """
    casters = casters or {}
    environ = os.environ if environ is None else environ
    file_values = load_config_file(config_path) if config_path else {}

    unknown = set(file_values) - set(defaults)
    if unknown:
        raise ConfigValidationError(f"Unknown configuration keys: {sorted(unknown)}")

    resolved: dict[str, Any] = {}
    sources: dict[str, str] = {}
    for key, default in defaults.items():
        env_key = f"{env_prefix}{key.upper()}"
        if cli_values.get(key) is not None:
            value, source = cli_values[key], "cli"
        elif env_key in environ:
            value, source = environ[env_key], "env"
        elif file_values.get(key) is not None:
            value, source = file_values[key], "file"
        else:
            value, source = default, "default"
        resolved[key] = _cast(key, value, casters)
        sources[key] = source

    log.debug("Resolved configuration", extra={"sources": sources})
    return resolved


__all__ = ["load_config_file", "load_config_with_precedence"]
