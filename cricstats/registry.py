"""Registry of every distinct player name in the corpus."""

import logging
import threading
from pathlib import Path
from typing import Iterable, Optional

from .constants import PLAYER_REGISTRY_FILE, Competition
from .corpus import CorpusWalker
from .schemas import MatchScorecard
from .utils import load_json_safe, save_json

logger = logging.getLogger('cricstats.registry')


def collect_names(cards: Iterable[MatchScorecard], seen: Optional[dict[str, None]] = None) -> dict[str, None]:
    """
    Union of batsmen and bowler names, in first-encounter order.

    Within an innings batsmen are taken before bowlers.
    """
    names = seen if seen is not None else {}
    for card in cards:
        for innings in card.innings:
            for name in innings.batsmen:
                names.setdefault(name, None)
            for name in innings.bowlers:
                names.setdefault(name, None)
    return names


class PlayerRegistry:
    """
    Memoized list of player names, persisted as a flat JSON array.

    The file carries no version; delete it to force a rebuild.
    """

    def __init__(
        self,
        walker: CorpusWalker,
        genders: Optional[list[str]] = None,
        processed_dir: Optional[Path | str] = None,
    ):
        self.walker = walker
        self.genders = list(genders) if genders else [walker.store.gender]
        processed_dir = Path(processed_dir) if processed_dir else walker.store.processed_dir
        self.path = processed_dir / PLAYER_REGISTRY_FILE
        self._lock = threading.Lock()
        self._names: Optional[list[str]] = None

    def build(self) -> list[str]:
        """Walk every competition of every gender and collect names."""
        names: dict[str, None] = {}
        for gender in self.genders:
            walker = self.walker.for_gender(gender)
            for competition in Competition.corpus():
                collect_names(walker.iter_scorecards(competition), names)
        logger.info(f'Found {len(names)} distinct players')
        return list(names)

    def get_all_player_names(self) -> list[str]:
        """Distinct player names, loaded from disk or built and persisted."""
        with self._lock:
            if self._names is not None:
                return list(self._names)

            if self.path.exists():
                data = load_json_safe(self.path)
                if isinstance(data, list) and all(isinstance(n, str) for n in data):
                    logger.debug(f'Loaded player registry from {self.path}')
                    self._names = data
                    return list(data)
                logger.warning(f'Ignoring malformed player registry {self.path}')

            names = self.build()
            save_json(self.path, names)
            self._names = names
            return list(names)

    def contains(self, player_name: str) -> bool:
        return player_name in set(self.get_all_player_names())

    def refresh(self) -> list[str]:
        """Discard the persisted registry and rebuild it."""
        with self._lock:
            self._names = None
            if self.path.exists():
                self.path.unlink()
        return self.get_all_player_names()
