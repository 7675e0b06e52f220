"""Pydantic schemas for raw match records, derived statistics and config."""

import math
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator

from .constants import (
    DEFAULT_BALLS_PER_OVER,
    DEFAULT_GENDER,
    PROFILE_VERSION,
    SCORECARD_VERSION,
    Competition,
)


# ---------------------------------------------------------------------------
# Raw match records (Cricsheet JSON)
# ---------------------------------------------------------------------------


class DeliveryRuns(BaseModel):
    """Runs off a single delivery."""

    batter: int = 0
    extras: int = 0
    total: int = 0

    class Config:
        extra = 'ignore'


class WicketEvent(BaseModel):
    """A dismissal recorded on a delivery."""

    player_out: str = ''
    kind: str = ''
    fielders: list[str] = Field(default_factory=list)

    @field_validator('fielders', mode='before')
    @classmethod
    def fielder_names(cls, v):
        """Cricsheet lists fielders as {"name": ...} objects; keep the names."""
        if v is None:
            return []
        return [f.get('name', '') if isinstance(f, dict) else f for f in v]

    class Config:
        extra = 'ignore'


class Delivery(BaseModel):
    """One ball bowled."""

    batter: str = ''
    bowler: str = ''
    non_striker: str = ''
    runs: DeliveryRuns = Field(default_factory=DeliveryRuns)
    wickets: list[WicketEvent] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


class Over(BaseModel):
    """An over number and its deliveries in bowled order."""

    over: int = 0
    deliveries: list[Delivery] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


class RawInnings(BaseModel):
    """One team's batting turn as recorded ball by ball."""

    team: str = ''
    overs: list[Over] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


class Toss(BaseModel):
    winner: str = ''
    decision: str = ''

    class Config:
        extra = 'ignore'


class OutcomeMargin(BaseModel):
    runs: Optional[int] = None
    wickets: Optional[int] = None
    innings: Optional[int] = None

    class Config:
        extra = 'ignore'


class Outcome(BaseModel):
    """Match outcome. ``winner`` is empty for draws, ties and no results."""

    winner: str = ''
    result: str = ''
    method: str = ''
    by: OutcomeMargin = Field(default_factory=OutcomeMargin)

    class Config:
        extra = 'ignore'


class MatchInfo(BaseModel):
    """Match metadata block."""

    balls_per_over: Optional[int] = Field(None, ge=1)
    city: str = ''
    dates: list[str] = Field(default_factory=list)
    gender: str = ''
    match_type: str = ''
    season: Union[str, int] = ''
    venue: str = ''
    teams: list[str] = Field(default_factory=list)
    toss: Toss = Field(default_factory=Toss)
    outcome: Outcome = Field(default_factory=Outcome)
    officials: dict[str, list[str]] = Field(default_factory=dict)
    players: dict[str, list[str]] = Field(default_factory=dict)
    player_of_match: list[str] = Field(default_factory=list)
    event: dict[str, Any] = Field(default_factory=dict)

    class Config:
        extra = 'ignore'


class RawMatch(BaseModel):
    """Complete raw match file: meta, info and innings."""

    meta: dict[str, Any] = Field(default_factory=dict)
    info: MatchInfo = Field(default_factory=MatchInfo)
    innings: list[RawInnings] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


# ---------------------------------------------------------------------------
# Scorecards
# ---------------------------------------------------------------------------


class BatsmanScorecard(BaseModel):
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    strike_rate: float = 0.0

    class Config:
        extra = 'forbid'


class BowlerScorecard(BaseModel):
    """Bowling figures. ``maidens`` is None: maiden overs are not computed."""

    balls: int = 0
    overs: float = 0.0
    maidens: Optional[int] = None
    runs: int = 0
    wickets: int = 0

    class Config:
        extra = 'forbid'


class InningsScorecard(BaseModel):
    """
    Scorecard for one team-innings.

    ``total_wickets`` is None until the counting rules for retirements and
    non-striker run outs are settled.
    """

    team: str = ''
    batsmen: dict[str, BatsmanScorecard] = Field(default_factory=dict)
    bowlers: dict[str, BowlerScorecard] = Field(default_factory=dict)
    total_runs: int = 0
    total_wickets: Optional[int] = None
    total_overs: float = 0.0
    total_balls: int = 0
    total_extras: int = 0

    class Config:
        extra = 'forbid'


class MatchScorecard(BaseModel):
    """Versioned per-match scorecard, as persisted in the processed cache."""

    version: int = SCORECARD_VERSION
    balls_per_over: int = Field(DEFAULT_BALLS_PER_OVER, ge=1)
    winner: str = ''
    toss_winner: str = ''
    toss_decision: str = ''
    city: str = ''
    match_type: str = ''
    match_result: str = ''
    innings: list[InningsScorecard] = Field(default_factory=list)

    class Config:
        extra = 'forbid'


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class _ByCompetition(BaseModel):
    """Mixin for models holding one field per Competition member."""

    def __getitem__(self, competition: Competition):
        return getattr(self, Competition.parse(competition).value)


class PlayerStats(BaseModel):
    """
    Career block for one player in one competition.

    ``average`` is NaN when the player has no recorded innings, and is
    written as null.
    ``maidens`` is None: maiden overs are not computed.
    """

    runs: list[int] = Field(default_factory=list)
    centuries: int = 0
    wickets: list[int] = Field(default_factory=list)
    fifers: int = 0
    maidens: Optional[int] = None
    average: float = math.nan
    total_runs: int = 0
    total_wickets: int = 0

    @field_validator('average', mode='before')
    @classmethod
    def undefined_from_null(cls, v):
        return math.nan if v is None else v

    @field_serializer('average')
    def undefined_to_null(self, v: float) -> Optional[float]:
        """Write NaN as null so persisted files are strict JSON."""
        return None if math.isnan(v) else v

    class Config:
        extra = 'forbid'


class PlayerStatsByCompetition(_ByCompetition):
    tests: PlayerStats = Field(default_factory=PlayerStats)
    t20s: PlayerStats = Field(default_factory=PlayerStats)
    odis: PlayerStats = Field(default_factory=PlayerStats)
    ipl: PlayerStats = Field(default_factory=PlayerStats)
    all: PlayerStats = Field(default_factory=PlayerStats)

    class Config:
        extra = 'forbid'


class PlayerProfile(BaseModel):
    version: int = PROFILE_VERSION
    name: str = Field(..., min_length=1)
    gender: str = DEFAULT_GENDER
    stats: PlayerStatsByCompetition = Field(default_factory=PlayerStatsByCompetition)

    class Config:
        extra = 'forbid'


class InningsStats(BaseModel):
    """
    Flattened statistics for one team-innings.

    ``runs_per_over`` is NaN for an innings with no balls (null when
    dumped). Extremes (highest/lowest score, max/min wickets) are None
    when there are no batsmen or bowlers to take them from.
    """

    runs: int = 0
    wickets: Optional[int] = None
    overs: float = 0.0
    balls: int = 0
    centuries: int = 0
    fifers: int = 0
    highest_score: Optional[int] = None
    lowest_score: Optional[int] = None
    max_wickets: Optional[int] = None
    min_wickets: Optional[int] = None
    total_extras: int = 0
    total_boundaries: int = 0
    runs_per_over: float = math.nan

    @field_validator('runs_per_over', mode='before')
    @classmethod
    def undefined_from_null(cls, v):
        return math.nan if v is None else v

    @field_serializer('runs_per_over')
    def undefined_to_null(self, v: float) -> Optional[float]:
        """Write NaN as null so persisted files are strict JSON."""
        return None if math.isnan(v) else v

    class Config:
        extra = 'forbid'


class InningsStatsReport(_ByCompetition):
    tests: list[InningsStats] = Field(default_factory=list)
    t20s: list[InningsStats] = Field(default_factory=list)
    odis: list[InningsStats] = Field(default_factory=list)
    ipl: list[InningsStats] = Field(default_factory=list)
    all: list[InningsStats] = Field(default_factory=list)

    class Config:
        extra = 'forbid'


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class StatsConfig(BaseModel):
    """Pipeline configuration settings."""

    dataset_dir: str = 'datasets/cricket'
    processed_dir: str = 'datasets/cricket/processed'
    genders: list[str] = Field(default_factory=lambda: [DEFAULT_GENDER], min_length=1)
    default_gender: str = DEFAULT_GENDER
    balls_per_over: int = Field(DEFAULT_BALLS_PER_OVER, ge=1, le=10)
    skip_unreadable_matches: bool = False

    @field_validator('genders')
    @classmethod
    def validate_genders(cls, v):
        """Ensure gender keys are usable as directory suffixes."""
        for gender in v:
            if not gender or '/' in gender or '_' in gender:
                raise ValueError(f'Invalid gender key: {gender!r}')
        return v

    class Config:
        extra = 'forbid'
