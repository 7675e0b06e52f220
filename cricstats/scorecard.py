"""Build per-match scorecards from raw ball-by-ball records."""

from typing import Optional

from .constants import BOWLER_CREDITED_DISMISSALS, DEFAULT_BALLS_PER_OVER, SCORECARD_VERSION
from .models import InningsTally
from .schemas import Delivery, MatchInfo, MatchScorecard, RawInnings, RawMatch


def credits_bowler(kind: str) -> bool:
    """Whether a dismissal of this kind counts as a wicket for the bowler."""
    return kind.strip().lower() in BOWLER_CREDITED_DISMISSALS


def apply_delivery(tally: InningsTally, delivery: Delivery) -> None:
    """
    Fold one delivery into the innings tally.

    Every delivery counts as a ball, for the innings, the striker and the
    bowler alike; wides and no-balls are not filtered out.
    """
    runs = delivery.runs

    tally.runs += runs.total
    tally.extras += runs.extras
    tally.balls += 1

    batter = tally.batter(delivery.batter)
    batter.runs += runs.batter
    batter.balls += 1
    if runs.batter == 4:
        batter.fours += 1
    elif runs.batter == 6:
        batter.sixes += 1

    bowler = tally.bowler(delivery.bowler)
    bowler.runs += runs.total
    bowler.balls += 1
    bowler.wickets += sum(1 for w in delivery.wickets if credits_bowler(w.kind))


def build_innings(innings: RawInnings, balls_per_over: int = DEFAULT_BALLS_PER_OVER) -> InningsTally:
    """Process every delivery of an innings in bowled order."""
    tally = InningsTally(team=innings.team, balls_per_over=balls_per_over)
    for over in innings.overs:
        for delivery in over.deliveries:
            apply_delivery(tally, delivery)
    return tally


def match_result(info: MatchInfo) -> str:
    """Human-readable result, e.g. 'India won by 36 runs'; empty without a winner."""
    outcome = info.outcome
    if not outcome.winner:
        return ''
    return f'{outcome.winner} won by {outcome.by.runs or 0} runs'


def build_scorecard(raw: RawMatch, balls_per_over: Optional[int] = None) -> MatchScorecard:
    """
    Build a versioned scorecard from a raw match record.

    Pure and deterministic. Balls per over come from the match info when
    recorded, then from ``balls_per_over``, then the default of 6.

    Args:
        raw: Parsed raw match record
        balls_per_over: Fallback when the record does not say

    Returns:
        MatchScorecard with one InningsScorecard per innings
    """
    info = raw.info
    bpo = info.balls_per_over or balls_per_over or DEFAULT_BALLS_PER_OVER

    innings = [build_innings(inn, bpo).to_scorecard() for inn in raw.innings]

    return MatchScorecard(
        version=SCORECARD_VERSION,
        balls_per_over=bpo,
        winner=info.outcome.winner,
        toss_winner=info.toss.winner,
        toss_decision=info.toss.decision,
        city=info.city,
        match_type=info.match_type,
        match_result=match_result(info),
        innings=innings,
    )
