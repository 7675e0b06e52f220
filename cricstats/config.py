"""Pipeline configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .constants import CONFIG_PATH, PROJECT_DIR
from .schemas import StatsConfig
from .utils import load_json

CONFIG_ENV_VAR = 'CRICSTATS_CONFIG'


def config_path() -> Path:
    """Path of the active config file ($CRICSTATS_CONFIG or data/stats_config.json)."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


@lru_cache(maxsize=1)
def get_config() -> StatsConfig:
    """
    Load pipeline configuration.

    Configuration is cached after first load.

    Returns:
        StatsConfig object with validated settings

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ParseError: If config file has invalid structure

    Example:
        from cricstats.config import get_config
        config = get_config()
        print(f"Dataset: {config.dataset_dir}")
    """
    return load_json(config_path(), schema=StatsConfig)


def _resolve(directory: str) -> Path:
    path = Path(directory).expanduser()
    return path if path.is_absolute() else PROJECT_DIR / path


def get_dataset_dir() -> Path:
    """Directory holding the <competition>_<gender>_json folders."""
    return _resolve(get_config().dataset_dir)


def get_processed_dir() -> Path:
    """Root of the processed-data cache."""
    return _resolve(get_config().processed_dir)


def get_genders() -> list[str]:
    """Genders walked when building the player registry."""
    return get_config().genders


def get_default_gender() -> str:
    """Gender used when a query does not name one."""
    return get_config().default_gender


def get_balls_per_over() -> int:
    """Fallback balls-per-over for matches that do not record it."""
    return get_config().balls_per_over


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file (or $CRICSTATS_CONFIG) changes during
    runtime and you need to reload it. The default query service is
    dropped too, so module-level queries pick up the new directories.
    """
    from .service import default_service

    get_config.cache_clear()
    default_service.cache_clear()
