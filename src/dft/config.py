"""Configuration system with env overrides."""

import json
import os
import sys
from pathlib import Path
from typing import Any

# Module-level cache for singleton pattern
_config_cache: "Config | None" = None

PROJECTS_SUBDIR = Path("depthfirst") / "projects"


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    """Get default config directory, respecting DFT_CONFIG_DIR env var."""
    config_dir = os.environ.get("DFT_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "dft"


def get_platform_data_dir() -> Path:
    """Platform data directory.

    - macOS: ~/Library/Application Support
    - Windows: %APPDATA%
    - Linux and others: $XDG_DATA_HOME or ~/.local/share
    """
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


class ConfigMeta:
    """Schema definition - separate from runtime state."""

    TOGGLES: dict[str, str] = {
        "confirm_delete": "Ask before deleting a project without --yes",
    }

    SETTINGS: dict[str, str] = {
        "data_dir": "Data directory (empty = platform default)",
        "feedback_timeout": "Seconds a feedback message stays visible",
        "interactive_width": "Max width for the interactive view (default: 100)",
        "default_view": "Initial session view (list|zen)",
    }


class Config:
    """Runtime configuration with env override support."""

    DEFAULTS: dict[str, Any] = {
        # Toggles
        "confirm_delete": True,
        # Settings
        "data_dir": "",  # Empty = platform data dir
        "feedback_timeout": 1.5,
        "interactive_width": 100,
        "default_view": "list",
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        self._data: dict[str, Any] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def projects_dir(self) -> Path:
        """Directory holding one ``<name>.json`` per project."""
        base = Path(self.data_dir).expanduser() if self.data_dir else get_platform_data_dir()
        return base / PROJECTS_SUBDIR

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Factory method - explicit loading with caching."""
        global _config_cache

        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._load_from_file()
        config._apply_env_overrides()

        if config_dir is None:
            _config_cache = config

        return config

    def __getattr__(self, name: str) -> Any:
        """Access config values as attributes."""
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        if name in self.DEFAULTS:
            return self.DEFAULTS[name]
        raise AttributeError(f"Config has no attribute '{name}'")

    def items(self) -> list[tuple[str, Any]]:
        """Return (key, effective value) for every known setting."""
        return [(key, getattr(self, key)) for key in self.DEFAULTS]

    def set(self, key: str, value: Any) -> None:
        """Set value and persist. String values are coerced to the default's type."""
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown setting: {key}")
        if isinstance(value, str):
            value = self._coerce(value, type(self.DEFAULTS[key]))
        self._data[key] = value
        self._save()

    def _load_from_file(self) -> None:
        if self._config_file.exists():
            try:
                content = self._config_file.read_text()
                if content.strip():
                    self._data = json.loads(content)
            except json.JSONDecodeError:
                # Corrupted config - use defaults, will be fixed on next save
                self._data = {}

    def _save(self) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self._data, indent=2))

    def _apply_env_overrides(self) -> None:
        """Apply DFT_* env vars (highest priority)."""
        for key, default in self.DEFAULTS.items():
            env_key = f"DFT_{key.upper()}"
            if env_key in os.environ:
                self._data[key] = self._coerce(os.environ[env_key], type(default))

    @staticmethod
    def _coerce(value: str, target_type: type) -> Any:
        """Coerce string env value to target type."""
        if target_type is bool:
            return value.lower() in ("true", "1", "yes")
        if target_type is int:
            return int(value)
        if target_type is float:
            return float(value)
        return value
