"""Unit tests for the scorecard builder."""

import pytest

from cricstats.constants import SCORECARD_VERSION
from cricstats.metrics import overs_from_balls, strike_rate
from cricstats.schemas import RawMatch
from cricstats.scorecard import build_scorecard, credits_bowler, match_result

from factories import delivery, innings, match_record, single_ball_match, wicket


def build(record: dict, **kwargs):
    return build_scorecard(RawMatch.model_validate(record), **kwargs)


class TestOversFromBalls:
    """Tests for the overs notation helper."""

    def test_complete_overs(self):
        """Test 12 balls at 6 per over is 2.0 overs."""
        assert overs_from_balls(12, 6) == 2.0

    def test_partial_over(self):
        """Test 14 balls at 6 per over is written 2.2."""
        assert overs_from_balls(14, 6) == pytest.approx(2.2)

    def test_eight_ball_overs(self):
        """Test 8-ball overs: 10 balls is 1.2."""
        assert overs_from_balls(10, 8) == pytest.approx(1.2)

    def test_zero_balls(self):
        """Test no balls is 0 overs."""
        assert overs_from_balls(0, 6) == 0.0

    def test_invalid_balls_per_over(self):
        """Test balls_per_over must be positive."""
        with pytest.raises(ValueError):
            overs_from_balls(6, 0)


class TestInningsTotals:
    """Tests for innings-level totals."""

    def test_zero_innings(self):
        """Test a match with no innings builds an empty scorecard."""
        card = build(match_record())
        assert card.innings == []
        assert card.version == SCORECARD_VERSION

    def test_totals_accumulate(self):
        """Test runs, extras and balls add up across overs."""
        record = match_record(
            innings(
                'X',
                [delivery(batter_runs=1), delivery(batter_runs=4), delivery(extras=1)],
                [delivery(batter_runs=2, extras=1)],
            )
        )
        inn = build(record).innings[0]
        assert inn.team == 'X'
        assert inn.total_runs == 9
        assert inn.total_extras == 2
        assert inn.total_balls == 4

    def test_every_delivery_counts_as_a_ball(self):
        """Test wides and wicket deliveries are still counted in total_balls."""
        record = match_record(
            innings(
                'X',
                [
                    delivery(extras=1),  # wide
                    delivery(extras=5),  # boundary wides
                    delivery(wickets=[wicket('P1')]),
                    delivery(batter_runs=1),
                ],
            )
        )
        inn = build(record).innings[0]
        assert inn.total_balls == 4
        assert inn.total_overs == pytest.approx(0.4)

    def test_total_overs(self):
        """Test total overs derive from the innings ball count."""
        deliveries = [delivery() for _ in range(14)]
        inn = build(match_record(innings('X', deliveries[:6], deliveries[6:12], deliveries[12:]))).innings[0]
        assert inn.total_overs == pytest.approx(2.2)

    def test_total_wickets_not_computed(self):
        """Test total_wickets stays None rather than a misleading zero."""
        record = match_record(innings('X', [delivery(wickets=[wicket('P1')])]))
        assert build(record).innings[0].total_wickets is None

    def test_multiple_innings_keep_order(self):
        """Test innings appear in the order they were played."""
        record = match_record(
            innings('X', [delivery('P1', 'B1', batter_runs=1)]),
            innings('Y', [delivery('B1', 'P1', batter_runs=2)]),
        )
        card = build(record)
        assert [i.team for i in card.innings] == ['X', 'Y']
        assert card.innings[1].batsmen['B1'].runs == 2

    def test_innings_without_overs(self):
        """Test a forfeited innings (no overs) has zero totals."""
        card = build(match_record({'team': 'X'}))
        inn = card.innings[0]
        assert inn.total_balls == 0
        assert inn.total_overs == 0.0
        assert inn.batsmen == {}


class TestBatting:
    """Tests for batsman figures."""

    def test_runs_and_balls(self):
        """Test batter runs and balls faced accumulate per striker."""
        record = match_record(
            innings(
                'X',
                [
                    delivery('P1', batter_runs=1),
                    delivery('P2', batter_runs=2),
                    delivery('P1', batter_runs=3),
                ],
            )
        )
        batsmen = build(record).innings[0].batsmen
        assert batsmen['P1'].runs == 4
        assert batsmen['P1'].balls == 2
        assert batsmen['P2'].runs == 2
        assert list(batsmen) == ['P1', 'P2']

    def test_fours_and_sixes(self):
        """Test boundaries counted on exactly 4 and 6 batter runs."""
        record = match_record(
            innings('X', [delivery(batter_runs=4), delivery(batter_runs=6), delivery(batter_runs=5)])
        )
        batsman = build(record).innings[0].batsmen['P1']
        assert batsman.fours == 1
        assert batsman.sixes == 1
        assert batsman.runs == 15

    def test_four_byes_are_not_a_four(self):
        """Test total 4 with 0 batter runs does not credit a four."""
        record = match_record(innings('X', [delivery(batter_runs=0, extras=4, total=4)]))
        inn = build(record).innings[0]
        assert inn.batsmen['P1'].fours == 0
        assert inn.batsmen['P1'].runs == 0
        assert inn.total_runs == 4

    def test_strike_rate(self):
        """Test strike rate is runs per 100 balls."""
        record = match_record(innings('X', [delivery(batter_runs=4), delivery(batter_runs=0)]))
        assert build(record).innings[0].batsmen['P1'].strike_rate == 200.0

    def test_strike_rate_zero_balls(self):
        """Test strike rate is exactly 0 with no balls faced."""
        assert strike_rate(0, 0) == 0.0


class TestBowling:
    """Tests for bowler figures."""

    def test_runs_conceded_include_extras(self):
        """Test bowlers concede the delivery total."""
        record = match_record(innings('X', [delivery(batter_runs=2, extras=1), delivery(extras=1)]))
        assert build(record).innings[0].bowlers['B1'].runs == 4

    def test_overs_per_bowler(self):
        """Test each bowler's overs come from their own deliveries."""
        record = match_record(
            innings(
                'X',
                [delivery(bowler='B1') for _ in range(6)],
                [delivery(bowler='B2') for _ in range(6)],
                [delivery(bowler='B1') for _ in range(3)],
            )
        )
        bowlers = build(record).innings[0].bowlers
        assert bowlers['B1'].balls == 9
        assert bowlers['B1'].overs == pytest.approx(1.3)
        assert bowlers['B2'].balls == 6
        assert bowlers['B2'].overs == pytest.approx(1.0)

    def test_wickets_credited_to_bowler(self):
        """Test bowled, caught and lbw count for the bowler."""
        record = match_record(
            innings(
                'X',
                [
                    delivery('P1', wickets=[wicket('P1', 'bowled')]),
                    delivery('P3', wickets=[wicket('P3', 'caught', ['F1'])]),
                    delivery('P4', wickets=[wicket('P4', 'lbw')]),
                ],
            )
        )
        assert build(record).innings[0].bowlers['B1'].wickets == 3

    def test_run_out_not_credited(self):
        """Test run outs and retirements are not bowler wickets."""
        record = match_record(
            innings(
                'X',
                [
                    delivery(wickets=[wicket('P2', 'run out', ['F1'])]),
                    delivery(wickets=[wicket('P1', 'retired hurt')]),
                ],
            )
        )
        assert build(record).innings[0].bowlers['B1'].wickets == 0

    def test_credits_bowler_kind_matching(self):
        """Test dismissal kind matching ignores case and whitespace."""
        assert credits_bowler(' Caught and Bowled ')
        assert credits_bowler('stumped')
        assert not credits_bowler('obstructing the field')

    def test_maidens_not_computed(self):
        """Test maidens are None (not computed), not zero."""
        record = match_record(innings('X', [delivery() for _ in range(6)]))
        assert build(record).innings[0].bowlers['B1'].maidens is None


class TestBallsPerOver:
    """Tests for balls-per-over resolution."""

    def test_uses_match_info(self):
        """Test balls_per_over from match info wins."""
        record = match_record(innings('X', [delivery() for _ in range(8)]), balls_per_over=8)
        inn = build(record, balls_per_over=6).innings[0]
        assert inn.total_overs == 1.0

    def test_falls_back_to_argument(self):
        """Test the argument is used when the record omits balls_per_over."""
        record = match_record(innings('X', [delivery() for _ in range(8)]), balls_per_over=None)
        assert build(record, balls_per_over=8).innings[0].total_overs == 1.0

    def test_default_six(self):
        """Test the default is 6 balls per over."""
        record = match_record(innings('X', [delivery() for _ in range(8)]), balls_per_over=None)
        assert build(record).innings[0].total_overs == pytest.approx(1.2)


class TestMatchMetadata:
    """Tests for match-level fields."""

    def test_result_with_winner(self):
        """Test result string for a win by runs."""
        card = build(match_record(winner='X', by_runs=36))
        assert card.winner == 'X'
        assert card.match_result == 'X won by 36 runs'

    def test_result_winner_without_runs(self):
        """Test a winner without a runs margin reports 0 runs."""
        card = build(match_record(winner='Y'))
        assert card.match_result == 'Y won by 0 runs'

    def test_no_winner(self):
        """Test draws have an empty result and winner."""
        card = build(match_record())
        assert card.winner == ''
        assert card.match_result == ''

    def test_toss_city_and_type(self):
        """Test toss, city and match type are copied through."""
        card = build(match_record(city='Mumbai', match_type='ODI'))
        assert card.toss_winner == 'X'
        assert card.toss_decision == 'bat'
        assert card.city == 'Mumbai'
        assert card.match_type == 'ODI'

    def test_missing_info_defaults(self):
        """Test a record without info defaults to empty strings."""
        card = build_scorecard(RawMatch.model_validate({'innings': []}))
        assert card.city == ''
        assert card.toss_winner == ''
        assert card.match_result == ''

    def test_match_result_helper(self):
        """Test match_result reads the outcome block."""
        raw = RawMatch.model_validate(match_record(winner='X', by_runs=5))
        assert match_result(raw.info) == 'X won by 5 runs'

    def test_deterministic(self):
        """Test building the same record twice gives equal scorecards."""
        record = single_ball_match(6)
        assert build(record) == build(record)
