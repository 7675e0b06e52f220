"""Mutable tallies used while folding deliveries into a scorecard."""

from dataclasses import dataclass, field
from typing import Dict

from .metrics import overs_from_balls, strike_rate
from .schemas import BatsmanScorecard, BowlerScorecard, InningsScorecard


@dataclass
class BatterTally:
    """Running batting figures for one striker."""
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0

    def to_scorecard(self) -> BatsmanScorecard:
        return BatsmanScorecard(
            runs=self.runs,
            balls=self.balls,
            fours=self.fours,
            sixes=self.sixes,
            strike_rate=strike_rate(self.runs, self.balls),
        )


@dataclass
class BowlerTally:
    """Running bowling figures for one bowler."""
    balls: int = 0
    runs: int = 0
    wickets: int = 0

    def to_scorecard(self, balls_per_over: int) -> BowlerScorecard:
        return BowlerScorecard(
            balls=self.balls,
            overs=overs_from_balls(self.balls, balls_per_over),
            maidens=None,
            runs=self.runs,
            wickets=self.wickets,
        )


@dataclass
class InningsTally:
    """Container for one innings while its deliveries are processed."""
    team: str
    balls_per_over: int
    runs: int = 0
    extras: int = 0
    balls: int = 0
    batters: Dict[str, BatterTally] = field(default_factory=dict)  # first-appearance order
    bowlers: Dict[str, BowlerTally] = field(default_factory=dict)

    def batter(self, name: str) -> BatterTally:
        if name not in self.batters:
            self.batters[name] = BatterTally()
        return self.batters[name]

    def bowler(self, name: str) -> BowlerTally:
        if name not in self.bowlers:
            self.bowlers[name] = BowlerTally()
        return self.bowlers[name]

    def to_scorecard(self) -> InningsScorecard:
        return InningsScorecard(
            team=self.team,
            batsmen={name: t.to_scorecard() for name, t in self.batters.items()},
            bowlers={
                name: t.to_scorecard(self.balls_per_over) for name, t in self.bowlers.items()
            },
            total_runs=self.runs,
            total_wickets=None,
            total_overs=overs_from_balls(self.balls, self.balls_per_over),
            total_balls=self.balls,
            total_extras=self.extras,
        )
