"""Flattened per-innings statistics across the corpus."""

import logging

import polars as pl

from .constants import CENTURY_RUNS, FIFER_WICKETS, Competition
from .corpus import CorpusWalker
from .metrics import ratio
from .schemas import InningsScorecard, InningsStats, InningsStatsReport, MatchScorecard

logger = logging.getLogger('cricstats.innings')

INNINGS_FRAME_SCHEMA = {
    'competition': pl.Utf8,
    'runs': pl.Int64,
    'wickets': pl.Int64,
    'overs': pl.Float64,
    'balls': pl.Int64,
    'centuries': pl.Int64,
    'fifers': pl.Int64,
    'highest_score': pl.Int64,
    'lowest_score': pl.Int64,
    'max_wickets': pl.Int64,
    'min_wickets': pl.Int64,
    'total_extras': pl.Int64,
    'total_boundaries': pl.Int64,
    'runs_per_over': pl.Float64,
}


def innings_stats(innings: InningsScorecard) -> InningsStats:
    """Compute the flattened statistics of a single team-innings."""
    scores = [b.runs for b in innings.batsmen.values()]
    wickets = [b.wickets for b in innings.bowlers.values()]

    return InningsStats(
        runs=innings.total_runs,
        wickets=innings.total_wickets,
        overs=innings.total_overs,
        balls=innings.total_balls,
        centuries=sum(1 for r in scores if r >= CENTURY_RUNS),
        fifers=sum(1 for w in wickets if w >= FIFER_WICKETS),
        highest_score=max(scores, default=None),
        lowest_score=min(scores, default=None),
        max_wickets=max(wickets, default=None),
        min_wickets=min(wickets, default=None),
        total_extras=innings.total_extras,
        total_boundaries=sum(b.fours + b.sixes for b in innings.batsmen.values()),
        runs_per_over=ratio(innings.total_runs, innings.total_overs),
    )


def innings_stats_for(card: MatchScorecard) -> list[InningsStats]:
    """One entry per innings of the match, in innings order."""
    return [innings_stats(innings) for innings in card.innings]


class InningsAggregator:
    """Recomputes the innings report from the (cached) scorecards on every call."""

    def __init__(self, walker: CorpusWalker):
        self.walker = walker

    def stats_for(self, competition: Competition) -> list[InningsStats]:
        entries: list[InningsStats] = []
        self.walker.for_each_match(competition, lambda card: entries.extend(innings_stats_for(card)))
        return entries

    def get_innings_stats(self) -> InningsStatsReport:
        """
        Innings statistics for every competition.

        ``all`` concatenates tests, t20s, odis and ipl in that order.
        """
        buckets = {c: self.stats_for(c) for c in Competition.corpus()}
        report = InningsStatsReport(
            tests=buckets[Competition.TESTS],
            t20s=buckets[Competition.T20S],
            odis=buckets[Competition.ODIS],
            ipl=buckets[Competition.IPL],
            all=[entry for c in Competition.corpus() for entry in buckets[c]],
        )
        logger.info(f'Computed statistics for {len(report.all)} innings')
        return report


def innings_frame(report: InningsStatsReport) -> pl.DataFrame:
    """All innings of the report as a polars DataFrame with a competition column."""
    rows = [
        {'competition': competition.value, **entry.model_dump()}
        for competition in Competition.corpus()
        for entry in report[competition]
    ]
    return pl.DataFrame(rows, schema=INNINGS_FRAME_SCHEMA)


def summarize_innings(report: InningsStatsReport) -> pl.DataFrame:
    """
    Per-competition summary of the report.

    Innings with an undefined run rate are null in the frame and left out
    of the mean run rate.
    """
    frame = innings_frame(report)
    return (
        frame.group_by('competition', maintain_order=True)
        .agg(
            pl.len().alias('innings'),
            pl.col('runs').mean().alias('mean_runs'),
            pl.col('runs').max().alias('highest_total'),
            pl.col('highest_score').max().alias('highest_individual'),
            pl.col('centuries').sum().alias('centuries'),
            pl.col('fifers').sum().alias('fifers'),
            pl.col('total_boundaries').sum().alias('boundaries'),
            pl.col('runs_per_over').mean().alias('mean_runs_per_over'),
        )
    )
