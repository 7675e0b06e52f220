"""Constants and enumerations for cricstats."""

from enum import Enum
from pathlib import Path

# Bump when the shape or semantics of a persisted scorecard change.
# Cached files carrying a different version are rebuilt on read.
SCORECARD_VERSION = 3

PROFILE_VERSION = 1

DEFAULT_BALLS_PER_OVER = 6
DEFAULT_GENDER = 'male'

CENTURY_RUNS = 100
FIFER_WICKETS = 5

# Dismissal kinds credited to the bowler (run outs, retirements,
# obstruction and the like are not)
BOWLER_CREDITED_DISMISSALS = frozenset(
    {
        'bowled',
        'caught',
        'caught and bowled',
        'lbw',
        'stumped',
        'hit wicket',
    }
)

PROJECT_DIR = Path(__file__).parent.parent
CONFIG_PATH = PROJECT_DIR / 'data' / 'stats_config.json'

# Processed-data layout (relative to the processed directory)
MATCHES_SUBDIR = 'matches'
PLAYERS_SUBDIR = 'players'
PLAYER_REGISTRY_FILE = 'all_players.json'


class Competition(str, Enum):
    """Competition types in the dataset, plus the cross-competition aggregate."""

    TESTS = 'tests'
    T20S = 't20s'
    ODIS = 'odis'
    IPL = 'ipl'
    ALL = 'all'

    @property
    def is_aggregate(self) -> bool:
        return self is Competition.ALL

    @classmethod
    def corpus(cls) -> tuple['Competition', ...]:
        """Competitions backed by a raw dataset directory, in walk order."""
        return (cls.TESTS, cls.T20S, cls.ODIS, cls.IPL)

    @classmethod
    def parse(cls, value: 'str | Competition') -> 'Competition':
        """Look up a competition by value, rejecting unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ', '.join(c.value for c in cls)
            raise ValueError(f'Unknown competition {value!r} (expected one of: {valid})') from None

    def dataset_key(self, gender: str) -> str:
        """Directory key for this competition and gender, e.g. 'tests_male'."""
        if self.is_aggregate:
            raise ValueError('The aggregate competition has no dataset directory')
        return f'{self.value}_{gender}'
