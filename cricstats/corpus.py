"""Walk every match of a competition, building scorecards through the cache."""

import logging
import time
from typing import Callable, Iterator, Optional

from .constants import Competition
from .errors import MatchNotFoundError, ParseError
from .schemas import MatchScorecard
from .store import MatchStore

logger = logging.getLogger('cricstats.corpus')


class CorpusWalker:
    """
    Sequentially visits every scorecard of a competition.

    Matches are visited in file-name order of the raw dataset directory,
    which is not necessarily match-date order.

    By default a malformed match aborts the walk. With ``skip_errors`` the
    match is logged and skipped instead, so totals exclude it.
    """

    def __init__(self, store: MatchStore, skip_errors: bool = False):
        self.store = store
        self.skip_errors = skip_errors

    @classmethod
    def from_config(cls, gender: Optional[str] = None) -> 'CorpusWalker':
        from .config import get_config

        return cls(MatchStore.from_config(gender), skip_errors=get_config().skip_unreadable_matches)

    def for_gender(self, gender: str) -> 'CorpusWalker':
        if gender == self.store.gender:
            return self
        return CorpusWalker(self.store.for_gender(gender), skip_errors=self.skip_errors)

    def iter_scorecards(self, competition: Competition) -> Iterator[MatchScorecard]:
        """Yield the scorecard of every match in the competition."""
        competition = Competition.parse(competition)
        if competition.is_aggregate:
            raise ValueError('Walk each competition in Competition.corpus() instead of ALL')

        start = time.perf_counter()
        count = 0
        skipped = 0
        for match_id in self.store.match_ids(competition):
            try:
                card = self.store.get_or_build(competition, match_id)
            except (ParseError, MatchNotFoundError) as e:
                if not self.skip_errors:
                    raise
                skipped += 1
                logger.warning(f'Skipping match {match_id} in {competition.value}: {e}')
                continue
            count += 1
            yield card

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f'Walked {count} {self.store.gender} {competition.value} matches '
            f'({skipped} skipped) in {elapsed_ms:.0f}ms'
        )

    def for_each_match(
        self,
        competition: Competition,
        visitor: Callable[[MatchScorecard], None],
    ) -> int:
        """
        Call ``visitor`` with each scorecard of the competition.

        Returns:
            Number of scorecards visited
        """
        count = 0
        for card in self.iter_scorecards(competition):
            visitor(card)
            count += 1
        return count
