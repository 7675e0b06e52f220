"""Numeric formulas shared by the scorecard builder and the aggregators.

Ratios with a zero denominator (an average over zero innings, a run rate
over zero overs) return ``UNDEFINED`` (NaN), never 0.
"""

import math

UNDEFINED = math.nan


def is_undefined(value) -> bool:
    """True for the NaN sentinel (and for missing values)."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def overs_from_balls(ball_count: int, balls_per_over: int) -> float:
    """
    Convert a ball count to cricket's overs notation.

    14 balls at 6 per over is 2 overs and 2 balls, written 2.2.
    """
    if balls_per_over <= 0:
        raise ValueError(f'balls_per_over must be positive, got {balls_per_over}')
    completed, remaining = divmod(ball_count, balls_per_over)
    return completed + remaining / 10


def strike_rate(runs: int, balls: int) -> float:
    """Runs per 100 balls faced; 0 when no balls were faced."""
    return runs * 100 / balls if balls > 0 else 0.0


def ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or UNDEFINED when the denominator is zero."""
    if not denominator:
        return UNDEFINED
    return numerator / denominator


def batting_average(runs: list[int]) -> float:
    """Total runs over innings batted; UNDEFINED with no innings."""
    return ratio(sum(runs), len(runs))
