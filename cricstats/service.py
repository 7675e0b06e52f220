"""
Query functions for an HTTP layer (or any other caller).

Each query returns plain data that serializes to strict JSON. Undefined
statistics (an average with no innings, a run rate with no overs) are None.
"""

import logging
from functools import lru_cache
from typing import Any, Optional

from .config import get_config, get_processed_dir
from .corpus import CorpusWalker
from .errors import NotFoundError, PlayerNotFoundError
from .innings import InningsAggregator
from .profiles import PlayerProfiles
from .registry import PlayerRegistry

logger = logging.getLogger('cricstats.service')


class StatsService:
    """Wires the aggregators together over one corpus."""

    def __init__(self, walker: CorpusWalker, genders: Optional[list[str]] = None):
        self.walker = walker
        self.registry = PlayerRegistry(walker, genders=genders)
        self.profiles = PlayerProfiles(walker)
        self.innings = InningsAggregator(walker)

    @classmethod
    def from_config(cls) -> 'StatsService':
        config = get_config()
        walker = CorpusWalker.from_config(config.default_gender)
        service = cls(walker, genders=config.genders)
        logger.debug(f'Stats service using {get_processed_dir()}')
        return service

    def get_player_profile(self, player_name: str, gender: Optional[str] = None) -> dict[str, Any]:
        """
        Profile of a player known to the registry.

        Raises:
            PlayerNotFoundError: If the player never appears in the corpus
        """
        if not self.registry.contains(player_name):
            raise PlayerNotFoundError(player_name)
        return self.profiles.get_or_build(player_name, gender).model_dump()

    def get_innings_stats(self) -> dict[str, Any]:
        return self.innings.get_innings_stats().model_dump()

    def get_all_player_names(self) -> list[str]:
        return self.registry.get_all_player_names()


@lru_cache(maxsize=1)
def default_service() -> StatsService:
    """Service built from the active config (cached)."""
    return StatsService.from_config()


def get_player_profile(player_name: str, gender: Optional[str] = None) -> dict[str, Any]:
    """Player profile as a plain dict; raises PlayerNotFoundError for unknown names."""
    return default_service().get_player_profile(player_name, gender)


def get_innings_stats() -> dict[str, Any]:
    """Innings statistics for every competition as a plain dict."""
    return default_service().get_innings_stats()


def get_all_player_names() -> list[str]:
    """Every distinct player name in the corpus."""
    return default_service().get_all_player_names()


def status_for_error(error: BaseException) -> int:
    """HTTP status for a failed query: 404 for not-found errors, otherwise 500."""
    if isinstance(error, NotFoundError):
        return 404
    return 500
