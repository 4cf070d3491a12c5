"\"\"\"Configuration management utilities.\"\"\""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import AppConfig, load_config


class ConfigManager:
    """Simple YAML-backed configuration loader."""

    _EXTENSIONS = (".yaml", ".yml")

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name, with or without file extension."""
        path = self._resolve(name)
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a YAML mapping")
        return loaded

    def load_app_config(self, name: str) -> AppConfig:
        return load_config(self.load(name))

    def _resolve(self, name: str) -> Path:
        candidate = self._base_path / name
        if candidate.suffix in self._EXTENSIONS:
            return candidate
        for extension in self._EXTENSIONS:
            path = self._base_path / f"{name}{extension}"
            if path.exists():
                return path
        return self._base_path / f"{name}{self._EXTENSIONS[0]}"


def read_config_file(path: str | Path) -> AppConfig:
    """Load and validate a single YAML config file."""
    path = Path(path)
    return ConfigManager(path.parent).load_app_config(path.name)


__all__ = ["ConfigManager", "read_config_file"]
