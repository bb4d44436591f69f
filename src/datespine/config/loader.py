"""
Configuration file loading.

A project is a directory holding ``config.yaml``; ``config.<env>.yaml``, when
present, is deep-merged over it before placeholders are resolved.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from datespine.config.resolver import resolve_config
from datespine.exceptions import ConfigurationError

# Top-level sections that must be mappings when present
SECTIONS = ("connections", "calendar", "logging")

_MISSING = object()


class Config:
    """
    Resolved project configuration with dict-like, dot-notation access.

    ``config.get("calendar.upstream.table")`` walks nested mappings;
    ``config["calendar"]`` returns nested mappings wrapped as ``Config``.
    """

    def __init__(self, data: dict[str, Any], env: str = "dev", project_dir: Path | None = None):
        self.data = data
        self.env = env
        self.project_dir = project_dir
        self.connections: dict[str, Any] = data.get("connections") or {}
        self.calendar: dict[str, Any] = data.get("calendar") or {}

    def _lookup(self, key: str) -> Any:
        node: Any = self.data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING or value is None else value

    def __getitem__(self, key: str) -> Any:
        value = self._lookup(key)
        if value is _MISSING:
            raise KeyError(f"Config key '{key}' not found")
        if isinstance(value, dict):
            return Config(value, env=self.env, project_dir=self.project_dir)
        return value

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def keys(self):
        return self.data.keys()

    def items(self):
        return self.data.items()

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If the document or one of its sections is not a mapping
        """
        if not isinstance(self.data, dict):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(self.data).__name__}")
        errors = [
            f"Configuration '{section}' must be a dictionary, got {type(self.data[section]).__name__}"
            for section in SECTIONS
            if self.data.get(section) is not None and not isinstance(self.data[section], dict)
        ]
        if errors:
            raise ConfigurationError("\n".join(errors))


def load_config(project_path: Path | None = None, env: str | None = None) -> Config:
    """
    Load ``config.yaml``, merge the env overlay and resolve placeholders.

    Args:
        project_path: Project root (default: current directory)
        env: Environment name; selects ``config.<env>.yaml`` and fills ``{env}``
            (default: dev)

    Returns:
        Validated Config

    Raises:
        ConfigurationError: If config.yaml is missing, unreadable or malformed
    """
    project_path = Path(project_path) if project_path is not None else Path.cwd()
    base_path = project_path / "config.yaml"
    if not base_path.is_file():
        raise ConfigurationError(
            f"Configuration file not found: {base_path}\n"
            f"  Suggestion: run from the project root or pass --project-dir"
        )

    data = _read_yaml(base_path)
    if env:
        overlay_path = project_path / f"config.{env}.yaml"
        if overlay_path.is_file():
            data = _merge_dict(data, _read_yaml(overlay_path))

    env_name = env or "dev"
    config = Config(resolve_config(data, env_name), env=env_name, project_dir=project_path)
    config.validate()
    return config


def _read_yaml(path: Path) -> dict[str, Any]:
    """Parse one YAML file, reporting the line and column of syntax errors."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" at line {mark.line + 1}, column {mark.column + 1}" if mark is not None else ""
        raise ConfigurationError(
            f"Error parsing {path.name}{where}:\n  {e}\n  Suggestion: check indentation and quoting"
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path.name} must contain a mapping, got {type(data).__name__}")
    return data


def _merge_dict(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` onto a copy of ``base``; nested mappings merge, everything else replaces."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge_dict(merged[key], value)
        else:
            merged[key] = value
    return merged
