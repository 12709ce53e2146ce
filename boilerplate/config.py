"""
config.py

Responsibility: Load the optional `.boilerplate.yml` project file into a typed model.

Every key is optional. A missing file yields the defaults, with the project
name taken from the directory name. Setup and release treat the result as
the single source of truth for branch names, remote and registry.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = ".boilerplate.yml"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Config:
    """Project settings shared by the setup and release commands."""

    project_name: str
    description: str = ""
    main_branch: str = "main"
    develop_branch: str = "develop"
    remote: str = "origin"
    registry: str = "ghcr.io"
    changelog_limit: int = 10
    python_version: str = "3.12"
    node_version: str = "20"
    port: int = 8000

    def template_context(self) -> dict[str, object]:
        return {
            "project_name": self.project_name,
            "description": self.description,
            "python_version": self.python_version,
            "node_version": self.node_version,
            "port": self.port,
        }


_INT_KEYS = {"changelog_limit", "port"}


def _coerce(key: str, value: Any) -> Any:
    if key in _INT_KEYS:
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"`{key}` must be an integer, got {value!r}") from e
        if number < 0:
            raise ConfigError(f"`{key}` must not be negative")
        return number
    text = str(value).strip()
    if not text and key != "description":
        raise ConfigError(f"`{key}` must not be empty")
    return text


def load_config(root: str | Path) -> Config:
    """
    Read `<root>/.boilerplate.yml` if present. Unknown keys are rejected so that
    typos do not silently fall back to defaults.
    """
    root_path = Path(root).resolve()
    path = root_path / CONFIG_FILENAME

    data: dict[str, Any] = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must be a mapping/object at the top level.")
        data = loaded

    known = {f.name for f in fields(Config)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigError(f"Unknown key(s) in {CONFIG_FILENAME}: {', '.join(unknown)}")

    values = {key: _coerce(key, value) for key, value in data.items() if value is not None}
    values.setdefault("project_name", root_path.name)
    return Config(**values)
