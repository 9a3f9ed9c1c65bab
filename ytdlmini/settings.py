"""Persistent application settings stored as JSON in the user's config directory."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Mapping

import platformdirs

from .file_utils import APP_DIR_NAME, get_downloads_dir

__all__ = ["Settings", "SettingsError", "DEFAULT_RESOLUTION", "DEFAULT_MAX_CONCURRENT"]

DEFAULT_RESOLUTION = "1920x1080"
DEFAULT_MAX_CONCURRENT = 3
CONFIG_FILE_NAME = "config.json"


class SettingsError(ValueError):
    """Raised when settings are invalid or cannot be read or applied."""


def _default_config_path() -> Path:
    config_dir = platformdirs.user_config_dir()
    if not config_dir:
        raise SettingsError("Could not find config directory")
    return Path(config_dir) / APP_DIR_NAME / CONFIG_FILE_NAME


@dataclass
class Settings:
    """User-facing configuration of the downloader."""

    default_resolution: str = DEFAULT_RESOLUTION
    download_path: Path = field(default_factory=get_downloads_dir)
    max_concurrent_downloads: int = DEFAULT_MAX_CONCURRENT

    def __post_init__(self) -> None:
        self.download_path = Path(self.download_path)

    @classmethod
    def _from_mapping(cls, data: Any) -> Settings:
        if not isinstance(data, Mapping):
            raise SettingsError("settings must be a JSON object")
        try:
            resolution = data["default_resolution"]
            download_path = data["download_path"]
            max_concurrent = data["max_concurrent_downloads"]
        except KeyError as err:
            raise SettingsError(f"missing field {err.args[0]!r}") from err
        if not isinstance(resolution, str):
            raise SettingsError("default_resolution must be a string")
        if not isinstance(download_path, str):
            raise SettingsError("download_path must be a string")
        if (
            isinstance(max_concurrent, bool)
            or not isinstance(max_concurrent, int)
            or max_concurrent < 0
        ):
            raise SettingsError("max_concurrent_downloads must be a non-negative integer")
        return cls(resolution, Path(download_path), max_concurrent)

    def _to_mapping(self) -> dict[str, Any]:
        data = asdict(self)
        data["download_path"] = str(self.download_path)
        return data

    @classmethod
    def load(cls, path: str | Path | None = None) -> Settings:
        """Read settings from the config file, or return defaults if it is absent."""
        config_path = Path(path) if path is not None else _default_config_path()
        if not config_path.exists():
            return cls()
        content = config_path.read_text(encoding="utf-8")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as err:
            raise SettingsError(f"invalid settings file {config_path}: {err}") from err
        return cls._from_mapping(data)

    def save(self, path: str | Path | None = None) -> None:
        """Write the settings as pretty-printed JSON, creating parent directories."""
        config_path = Path(path) if path is not None else _default_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(self._to_mapping(), indent=2), encoding="utf-8")

    def set_resolution(self, resolution: str) -> None:
        """Set the default resolution, which must look like ``WIDTHxHEIGHT``."""
        if "x" in resolution and len(resolution.split("x")) == 2:
            self.default_resolution = resolution
        else:
            raise SettingsError("Invalid resolution format. Use format like '1920x1080'")

    def set_download_path(self, path: str | Path) -> None:
        """Set the download directory, creating it if it does not exist."""
        path = Path(path)
        if not path.exists():
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                raise SettingsError("Cannot create or access download directory") from err
        self.download_path = path