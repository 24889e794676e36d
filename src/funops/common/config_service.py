from __future__ import annotations

import json
import math
from numbers import Real
from pathlib import Path
from typing import Any


from loguru import logger


class ConfigError(ValueError):
    """Raised when persisted operator settings cannot be used."""

    pass


def validate_seconds(value: Any, name: str = "amount") -> float:
    # bool is a Real subclass; True seconds is never intended
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a number of seconds, got {value!r}")
    seconds = float(value)
    if math.isnan(seconds) or math.isinf(seconds):
        raise ValueError(f"{name} must be finite, got {value!r}")
    if seconds < 0:
        raise ValueError(f"{name} must not be negative, got {value!r}")
    return seconds


def validate_positive_int(value: Any, name: str = "n") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value!r}")
    return value


def validate_flag(value: Any, name: str = "quiet") -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be True or False, got {value!r}")
    return value


class ConfigService:
    """Handle the working path and the defaults used when applying operators."""

    def __init__(self, base_path: Path | None = None):
        self._base_path = Path(base_path) if base_path is not None else Path.cwd()
        self._settings = self.load_settings()

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def settings_path(self) -> Path:
        return self._base_path / "funops.json"

    @property
    def settings(self) -> dict:
        return dict(self._settings)

    @property
    def log_path(self) -> Path:
        log_file = Path(self._settings["log_file"])
        if log_file.is_absolute():
            return log_file
        return self._base_path / log_file

    def set_working_path(self, new_path: Path | None) -> Path:
        self._base_path = Path(new_path) if new_path is not None else Path.cwd()
        self._settings = self.load_settings()
        return self._base_path

    def load_settings(self) -> dict:
        default = self._default_settings()
        path = self.settings_path
        if path.is_file():
            try:
                data = json.loads(path.read_text())
                if isinstance(data, dict):
                    return self._normalize_settings(data)
            except json.JSONDecodeError:
                logger.warning("Failed to decode funops.json; using default settings")
        return default

    def save_settings(self, settings: dict) -> dict:
        normalized = self._normalize_settings(settings)
        self.settings_path.write_text(json.dumps(normalized, indent=4))
        self._settings = normalized
        return normalized

    def configure_quiet(self, quiet: bool = True) -> bool:
        self._settings["quiet"] = validate_flag(quiet, "quiet")
        return self._settings["quiet"]

    def configure_delay(self, delay: float = 0.1) -> float:
        seconds = validate_seconds(delay, "delay")
        logger.info(f"Fixed delay set to {seconds} seconds")
        self._settings["delay"] = seconds
        return seconds

    def configure_interval(self, min_interval: float = 1.0) -> float:
        seconds = validate_seconds(min_interval, "min_interval")
        logger.info(f"Minimum call interval set to {seconds} seconds")
        self._settings["min_interval"] = seconds
        return seconds

    def get_delays(self) -> tuple[float, float]:
        return self._settings["delay"], self._settings["min_interval"]

    def _default_settings(self) -> dict:
        return {
            "quiet": True,
            "delay": 0.1,
            "min_interval": 1.0,
            "dot_every": 10,
            "log_file": "funops.log",
            "include_hidden": False,
            "recursive": False,
            "simplify": True,
        }

    def _normalize_settings(self, settings: dict) -> dict:
        base = self._default_settings()
        unknown = sorted(set(settings) - set(base))
        if unknown:
            raise ConfigError(f"unknown settings: {', '.join(unknown)}")

        merged = {**base, **settings}
        try:
            return {
                "quiet": validate_flag(merged["quiet"], "quiet"),
                "delay": validate_seconds(merged["delay"], "delay"),
                "min_interval": validate_seconds(
                    merged["min_interval"], "min_interval"
                ),
                "dot_every": validate_positive_int(merged["dot_every"], "dot_every"),
                "log_file": self._normalize_log_file(merged["log_file"]),
                "include_hidden": validate_flag(
                    merged["include_hidden"], "include_hidden"
                ),
                "recursive": validate_flag(merged["recursive"], "recursive"),
                "simplify": validate_flag(merged["simplify"], "simplify"),
            }
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"invalid settings in {self.settings_path}: {exc}") from exc

    def _normalize_log_file(self, value: Any) -> str:
        if not isinstance(value, (str, Path)) or not str(value).strip():
            raise ValueError(f"log_file must be a non-empty path, got {value!r}")
        return str(value).strip()
