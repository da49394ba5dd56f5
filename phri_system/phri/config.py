"""
Configuration module for the PHRI System.

Settings are read from environment variables. A .env file in the working
directory is loaded first when present, so deployments can keep their
settings next to the service.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .scales import POINT, get_scale


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Attributes:
        default_scale: Scale used when a caller does not choose one
                       (PHRI_DEFAULT_SCALE, default "point")
        log_dir: Directory of the human-readable decision log
                 (PHRI_LOG_DIR, default "logs")
        log_level: Level name for configure_logging (PHRI_LOG_LEVEL, default "INFO")
    """

    default_scale: str = POINT
    log_dir: Path = Path("logs")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Builds settings from the environment.

        Args:
            env_file: Optional .env file to load; defaults to ./.env

        Raises:
            InvalidEnumError: If PHRI_DEFAULT_SCALE names an unknown scale
        """
        load_dotenv(env_file or Path(".env"))

        scale = os.getenv("PHRI_DEFAULT_SCALE", POINT).strip().lower()
        get_scale(scale)

        return cls(
            default_scale=scale,
            log_dir=Path(os.getenv("PHRI_LOG_DIR", "logs")),
            log_level=os.getenv("PHRI_LOG_LEVEL", "INFO").upper(),
        )
