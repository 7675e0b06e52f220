"""Cricket statistics pipeline: scorecards, player profiles and innings stats."""

from .constants import SCORECARD_VERSION, PROFILE_VERSION, Competition
from .errors import (
    CricstatsError,
    NotFoundError,
    MatchNotFoundError,
    PlayerNotFoundError,
    ParseError,
)
from .metrics import UNDEFINED, is_undefined, overs_from_balls
from .schemas import (
    RawMatch,
    MatchScorecard,
    InningsScorecard,
    PlayerProfile,
    PlayerStats,
    InningsStats,
    InningsStatsReport,
)
from .scorecard import build_scorecard
from .store import JsonStore, MatchStore
from .corpus import CorpusWalker
from .profiles import PlayerProfiles, build_profile
from .innings import InningsAggregator, innings_frame, summarize_innings
from .registry import PlayerRegistry
from .service import StatsService
from .validators import validate_scorecard

__all__ = [
    # Constants
    'SCORECARD_VERSION',
    'PROFILE_VERSION',
    'Competition',
    # Errors
    'CricstatsError',
    'NotFoundError',
    'MatchNotFoundError',
    'PlayerNotFoundError',
    'ParseError',
    # Metrics
    'UNDEFINED',
    'is_undefined',
    'overs_from_balls',
    # Schemas
    'RawMatch',
    'MatchScorecard',
    'InningsScorecard',
    'PlayerProfile',
    'PlayerStats',
    'InningsStats',
    'InningsStatsReport',
    # Pipeline
    'build_scorecard',
    'JsonStore',
    'MatchStore',
    'CorpusWalker',
    'PlayerProfiles',
    'build_profile',
    'InningsAggregator',
    'innings_frame',
    'summarize_innings',
    'PlayerRegistry',
    'StatsService',
    'validate_scorecard',
]
