"""Load AutorouteConfig from autoroute.yaml / autoroute.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from autoroute._errors import ConfigError
from autoroute.actions import ActionsMap
from autoroute.config import AutorouteConfig

_KNOWN_KEYS: frozenset[str] = frozenset({
    "controllers_dir", "actions", "meta", "pattern", "ignore",
    "extensions", "host", "port", "debug",
})


def load_config(root: Path, **overrides: object) -> AutorouteConfig:
    """Load AutorouteConfig from root, optionally merging a config file.

    Looks for autoroute.yaml, autoroute.yml, or autoroute.toml in root.  If
    found, loads and merges with overrides.  Overrides take precedence;
    ``None`` overrides are ignored so unset CLI flags keep file values.

    Raises:
        ConfigError: If the config file is malformed or has invalid values.

    """
    file_config = _read_config_file(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    if "actions" in merged:
        merged["actions"] = dict(ActionsMap.from_mapping(merged["actions"]))  # type: ignore[arg-type]
    try:
        return AutorouteConfig(root=root, **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid autoroute configuration in {root}: {exc}"
        raise ConfigError(msg) from exc


def _read_config_file(root: Path) -> dict[str, object]:
    """Read config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("autoroute.yaml", "autoroute.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "autoroute.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc
    return _extract_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc
    return _extract_section(data, path)


def _extract_section(data: object, path: Path) -> dict[str, object]:
    """Collect known keys from the top level and the ``autoroute`` section.

    Keys in the ``autoroute`` section win over top-level ones.
    """
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)

    result: dict[str, object] = {k: v for k, v in data.items() if k in _KNOWN_KEYS}
    section = data.get("autoroute")
    if isinstance(section, dict):
        unknown = sorted(set(section) - _KNOWN_KEYS)
        if unknown:
            msg = f"Unknown autoroute settings in {path}: {', '.join(unknown)}"
            raise ConfigError(msg)
        result.update(section)
    return result
