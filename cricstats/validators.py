"""Consistency checks for built scorecards."""

import math

from .constants import SCORECARD_VERSION
from .metrics import overs_from_balls, strike_rate
from .schemas import InningsScorecard, MatchScorecard


def validate_innings(innings: InningsScorecard, balls_per_over: int) -> list[str]:
    """
    Validate that an innings scorecard is internally consistent.

    Checks:
    - Batsmen runs plus extras add up to the innings total
    - Runs conceded by bowlers add up to the innings total
    - Balls bowled by bowlers add up to the innings ball count
    - Overs match the ball counts
    - Strike rates match runs and balls

    Args:
        innings: InningsScorecard to validate
        balls_per_over: Balls per over of the match (MatchScorecard.balls_per_over)

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    team = innings.team or '<unnamed>'

    batting_runs = sum(b.runs for b in innings.batsmen.values())
    if batting_runs + innings.total_extras != innings.total_runs:
        errors.append(
            f'{team}: batsmen runs ({batting_runs}) + extras ({innings.total_extras}) '
            f'!= total runs ({innings.total_runs})'
        )

    conceded = sum(b.runs for b in innings.bowlers.values())
    if conceded != innings.total_runs:
        errors.append(f'{team}: bowlers conceded {conceded} but innings total is {innings.total_runs}')

    bowled = sum(b.balls for b in innings.bowlers.values())
    if bowled != innings.total_balls:
        errors.append(f'{team}: bowlers bowled {bowled} balls but innings has {innings.total_balls}')

    expected_overs = overs_from_balls(innings.total_balls, balls_per_over)
    if not math.isclose(innings.total_overs, expected_overs):
        errors.append(
            f'{team}: total overs {innings.total_overs} != {expected_overs} '
            f'for {innings.total_balls} balls'
        )

    for name, bowler in innings.bowlers.items():
        expected = overs_from_balls(bowler.balls, balls_per_over)
        if not math.isclose(bowler.overs, expected):
            errors.append(f'{team}: {name} has {bowler.overs} overs for {bowler.balls} balls')

    for name, batsman in innings.batsmen.items():
        if batsman.fours + batsman.sixes > batsman.balls:
            errors.append(f'{team}: {name} has more boundaries than balls faced')
        expected = strike_rate(batsman.runs, batsman.balls)
        if not math.isclose(batsman.strike_rate, expected):
            errors.append(f'{team}: {name} strike rate {batsman.strike_rate} != {expected:.2f}')

    return errors


def validate_scorecard(card: MatchScorecard) -> list[str]:
    """
    Validate a match scorecard and all of its innings.

    Overs are checked against the balls per over recorded on the scorecard.

    Args:
        card: MatchScorecard to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if card.version != SCORECARD_VERSION:
        errors.append(f'Scorecard version {card.version} (current is {SCORECARD_VERSION})')

    if card.match_result and not card.winner:
        errors.append(f'Result "{card.match_result}" recorded without a winner')

    for innings in card.innings:
        errors.extend(validate_innings(innings, card.balls_per_over))

    return errors
