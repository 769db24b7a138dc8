"""Load InkwellConfig from inkwell.yaml / inkwell.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import dataclasses
import tomllib
from pathlib import Path

import yaml

from inkwell._errors import ConfigError
from inkwell.config import InkwellConfig

CONFIG_FILENAMES = ("inkwell.yaml", "inkwell.yml", "inkwell.toml")

_KNOWN_KEYS = frozenset(
    f.name for f in dataclasses.fields(InkwellConfig) if f.name != "root"
)


def load_config(root: Path, **overrides: object) -> InkwellConfig:
    """Load InkwellConfig from root, optionally merging a config file.

    Looks for inkwell.yaml, inkwell.yml, or inkwell.toml in root. If found,
    loads and merges with overrides. Overrides take precedence; overrides
    whose value is None are ignored so unset CLI flags fall through.

    Raises:
        ConfigError: If the config file cannot be parsed or names unknown keys.

    """
    file_config = _read_config_file(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}

    unknown = sorted(set(merged) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown config key(s): {', '.join(unknown)}"
        raise ConfigError(msg)

    try:
        return InkwellConfig(root=Path(root), **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid configuration: {exc}"
        raise ConfigError(msg) from exc


def _read_config_file(root: Path) -> dict[str, object]:
    """Read config from yaml/toml if present. Returns empty dict otherwise."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if not path.is_file():
            continue
        if path.suffix == ".toml":
            return _parse_toml(path)
        return _parse_yaml(path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_inkwell_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_inkwell_section(data, path)


def _flatten_inkwell_section(data: object, path: Path) -> dict[str, object]:
    """Extract inkwell.* keys into top-level config.

    Top-level keys and keys nested under an ``inkwell`` table are both
    accepted; the nested table wins on conflicts.
    """
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)

    result: dict[str, object] = {k: v for k, v in data.items() if k != "inkwell"}
    section = data.get("inkwell")
    if isinstance(section, dict):
        result.update(section)
    elif section is not None:
        msg = f"{path.name}: 'inkwell' must be a table"
        raise ConfigError(msg)
    return result
