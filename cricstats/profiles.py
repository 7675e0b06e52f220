"""Per-player career statistics folded across every competition."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from .constants import (
    CENTURY_RUNS,
    FIFER_WICKETS,
    PLAYERS_SUBDIR,
    PROFILE_VERSION,
    Competition,
)
from .corpus import CorpusWalker
from .metrics import batting_average
from .schemas import MatchScorecard, PlayerProfile, PlayerStats, PlayerStatsByCompetition
from .store import JsonStore

logger = logging.getLogger('cricstats.profiles')


def finalize_stats(stats: PlayerStats) -> PlayerStats:
    """Derive totals and average from the per-innings sequences."""
    stats.total_runs = sum(stats.runs)
    stats.total_wickets = sum(stats.wickets)
    stats.average = batting_average(stats.runs)
    return stats


def add_scorecard(stats: PlayerStats, card: MatchScorecard, player_name: str) -> None:
    """Append the player's innings from one match to ``stats``."""
    for innings in card.innings:
        batsman = innings.batsmen.get(player_name)
        if batsman is not None:
            stats.runs.append(batsman.runs)
            if batsman.runs >= CENTURY_RUNS:
                stats.centuries += 1

        bowler = innings.bowlers.get(player_name)
        if bowler is not None:
            stats.wickets.append(bowler.wickets)
            if bowler.wickets >= FIFER_WICKETS:
                stats.fifers += 1


def combine_stats(blocks: Iterable[PlayerStats]) -> PlayerStats:
    """
    Cross-competition block: concatenated sequences, re-derived counts.

    Maidens stay None because no block computes them.
    """
    combined = PlayerStats()
    for block in blocks:
        combined.runs.extend(block.runs)
        combined.wickets.extend(block.wickets)
    combined.centuries = sum(1 for r in combined.runs if r >= CENTURY_RUNS)
    combined.fifers = sum(1 for w in combined.wickets if w >= FIFER_WICKETS)
    return finalize_stats(combined)


def build_profile(walker: CorpusWalker, player_name: str) -> PlayerProfile:
    """
    Walk every competition and fold the player's innings into a profile.

    Args:
        walker: Corpus walker for the player's gender
        player_name: Name exactly as recorded in the match data

    Returns:
        PlayerProfile with tests, t20s, odis, ipl and all blocks
    """
    blocks: dict[Competition, PlayerStats] = {}
    for competition in Competition.corpus():
        stats = PlayerStats()
        walker.for_each_match(competition, lambda card: add_scorecard(stats, card, player_name))
        blocks[competition] = finalize_stats(stats)

    return PlayerProfile(
        version=PROFILE_VERSION,
        name=player_name,
        gender=walker.store.gender,
        stats=PlayerStatsByCompetition(
            tests=blocks[Competition.TESTS],
            t20s=blocks[Competition.T20S],
            odis=blocks[Competition.ODIS],
            ipl=blocks[Competition.IPL],
            all=combine_stats(blocks[c] for c in Competition.corpus()),
        ),
    )


class PlayerProfiles:
    """
    Memoized player profiles.

    Profiles for the walker's gender are stored at
    ``<processed_dir>/players/<name>.json``; other genders get their own
    ``<processed_dir>/players/<gender>/<name>.json`` so they never
    overwrite each other. A cached profile is rebuilt when its version,
    name or gender does not match. Profiles are not updated when new
    matches arrive; delete the file to refresh one.
    """

    def __init__(self, walker: CorpusWalker, processed_dir: Optional[Path | str] = None):
        self.walker = walker
        processed_dir = Path(processed_dir) if processed_dir else walker.store.processed_dir
        self.cache: JsonStore[PlayerProfile] = JsonStore(
            processed_dir / PLAYERS_SUBDIR, PlayerProfile, version=PROFILE_VERSION
        )

    def _key(self, player_name: str, gender: str) -> tuple[str, ...]:
        if gender == self.walker.store.gender:
            return (player_name,)
        return (gender, player_name)

    def profile_path(self, player_name: str, gender: Optional[str] = None) -> Path:
        return self.cache.path_for(self._key(player_name, gender or self.walker.store.gender))

    def get_or_build(self, player_name: str, gender: Optional[str] = None) -> PlayerProfile:
        """Return the player's profile, building it from the corpus on a miss."""
        gender = gender or self.walker.store.gender

        def build() -> PlayerProfile:
            logger.info(f'Building profile for {player_name} ({gender})')
            return build_profile(self.walker.for_gender(gender), player_name)

        return self.cache.get_or_build(
            self._key(player_name, gender),
            build,
            accept=lambda profile: profile.gender == gender and profile.name == player_name,
        )
