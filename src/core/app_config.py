"""
Application Configuration Module.
Defines the runtime settings of the goals tracker.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "GOALS_TRACKER_"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """
    Configuration settings for the goals tracker.

    Attributes:
        data_dir: Directory holding the goals file (None = platform default).
        goals_filename: Name of the binary goals file.
        debug: Whether to log at DEBUG level.
        log_dir: Directory for log files (None = "logs").
        zoom_speed: Multiplier applied to mouse wheel deltas.
        zoom_animation_ms: Duration of zoom/pan transitions.
        min_label_spacing_px: Minimum pixels between labelled ticks.
    """

    data_dir: Optional[Path] = None
    goals_filename: str = "goals.bin"
    debug: bool = False
    log_dir: Optional[Path] = None
    zoom_speed: float = 0.5
    zoom_animation_ms: int = 200
    min_label_spacing_px: int = 150

    def to_dict(self) -> dict:
        """
        Converts the config to a dictionary for JSON serialization.

        Returns:
            dict: Dictionary representation of the configuration.
        """
        return {
            "data_dir": str(self.data_dir) if self.data_dir else None,
            "goals_filename": self.goals_filename,
            "debug": self.debug,
            "log_dir": str(self.log_dir) if self.log_dir else None,
            "zoom_speed": self.zoom_speed,
            "zoom_animation_ms": self.zoom_animation_ms,
            "min_label_spacing_px": self.min_label_spacing_px,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """
        Creates an AppConfig from a dictionary.

        Args:
            data: Dictionary containing configuration values.

        Returns:
            AppConfig: A new AppConfig instance.
        """
        data_dir = Path(data["data_dir"]) if data.get("data_dir") else None
        log_dir = Path(data["log_dir"]) if data.get("log_dir") else None

        return cls(
            data_dir=data_dir,
            goals_filename=data.get("goals_filename", "goals.bin"),
            debug=bool(data.get("debug", False)),
            log_dir=log_dir,
            zoom_speed=float(data.get("zoom_speed", 0.5)),
            zoom_animation_ms=int(data.get("zoom_animation_ms", 200)),
            min_label_spacing_px=int(data.get("min_label_spacing_px", 150)),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Reads ``GOALS_TRACKER_*`` environment variables.

        Unset variables keep their defaults. Call ``load_dotenv()`` first to
        pick up a ``.env`` file.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            AppConfig: A new AppConfig instance.
        """
        env = os.environ if environ is None else environ
        data: dict = {}
        for key in (
            "data_dir",
            "goals_filename",
            "log_dir",
            "zoom_speed",
            "zoom_animation_ms",
            "min_label_spacing_px",
        ):
            value = env.get(ENV_PREFIX + key.upper())
            if value:
                data[key] = value
        debug = env.get(ENV_PREFIX + "DEBUG")
        if debug:
            data["debug"] = _env_bool(debug)
        return cls.from_dict(data)
