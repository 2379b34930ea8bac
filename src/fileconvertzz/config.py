from __future__ import annotations
import logging
import yaml
from pathlib import Path
from .errors import SettingsError
from .types_job_types import RenderSettings


DEFAULTS = {
    "jpeg_quality": 92,
    "raster_scale": 2.0,
    "output_dir": str(Path.home() / "Downloads"),
    "log_file": None,
    "log_level": "INFO",
    }

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class Settings:
    def __init__(self, data: dict | None = None):
        self._data = {**DEFAULTS, **(data or {})}

    @property
    def output_dir(self) -> Path:
        return Path(self._data["output_dir"]).expanduser()

    @property
    def log_file(self) -> Path | None:
        value = self._data.get("log_file")
        return Path(value).expanduser() if value else None

    @property
    def log_level(self) -> int:
        name = str(self._data["log_level"]).upper()
        if name not in LOG_LEVELS:
            raise SettingsError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {name!r}")
        return getattr(logging, name)

    @classmethod
    def from_file(cls, path: Path) -> "Settings":
        if not path.exists():
            return cls()
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls(data)

    def as_render(self) -> RenderSettings:
        try:
            quality = int(self._data["jpeg_quality"])
            scale = float(self._data["raster_scale"])
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"invalid render setting: {exc}") from exc
        if not 1 <= quality <= 100:
            raise SettingsError(f"jpeg_quality must be between 1 and 100, got {quality}")
        if scale <= 0:
            raise SettingsError(f"raster_scale must be positive, got {scale}")
        return RenderSettings(jpeg_quality=quality, raster_scale=scale)

    def get(self, key: str, default=None):
        return self._data.get(key, default)
