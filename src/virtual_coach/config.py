"""Runtime settings for virtual-coach."""

import os
from dataclasses import dataclass
from pathlib import Path

# Default data directory (repository root /data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"

DEFAULT_CATALOG_TTL_SECONDS = 5 * 60
DEFAULT_TICK_INTERVAL_SECONDS = 1.0

# Bounds enforced by the preference form
MIN_AVAILABLE_MINUTES = 15
MAX_AVAILABLE_MINUTES = 90


@dataclass
class Settings:
    """Application settings."""

    data_dir: Path = DATA_DIR
    catalog_ttl_seconds: float = DEFAULT_CATALOG_TTL_SECONDS
    tick_interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS
    min_minutes: int = MIN_AVAILABLE_MINUTES
    max_minutes: int = MAX_AVAILABLE_MINUTES


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build settings from environment variables over the module defaults.

    Recognised variables:
        VIRTUAL_COACH_DATA_DIR: directory holding the database and guest logs
        VIRTUAL_COACH_CATALOG_TTL: exercise cache lifetime in seconds
        VIRTUAL_COACH_TICK_INTERVAL: playback tick length in seconds
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    if env.get("VIRTUAL_COACH_DATA_DIR"):
        settings.data_dir = Path(env["VIRTUAL_COACH_DATA_DIR"]).expanduser()
    if env.get("VIRTUAL_COACH_CATALOG_TTL"):
        settings.catalog_ttl_seconds = float(env["VIRTUAL_COACH_CATALOG_TTL"])
    if env.get("VIRTUAL_COACH_TICK_INTERVAL"):
        settings.tick_interval_seconds = float(env["VIRTUAL_COACH_TICK_INTERVAL"])

    return settings
