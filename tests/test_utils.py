"""Tests for JSON I/O helpers and statistics primitives."""

import json
import math

import pytest

from cricstats.errors import ParseError
from cricstats.metrics import batting_average, ratio
from cricstats.schemas import PlayerStats, RawMatch
from cricstats.utils import load_json, load_json_safe, save_json

from factories import single_ball_match


class TestJsonIO:
    """Tests for load_json, save_json and load_json_safe."""

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / 'missing.json')

    def test_malformed_json(self, tmp_path):
        """Test malformed JSON raises ParseError naming the file."""
        path = tmp_path / 'bad.json'
        path.write_text('{"a": ')
        with pytest.raises(ParseError) as exc_info:
            load_json(path)
        assert exc_info.value.path == path

    def test_schema_validation(self, tmp_path):
        """Test a schema returns a validated model."""
        path = tmp_path / 'match.json'
        path.write_text(json.dumps(single_ball_match(4)))
        match = load_json(path, schema=RawMatch)
        assert match.innings[0].overs[0].deliveries[0].runs.batter == 4

    def test_fielder_names_normalized(self, tmp_path):
        """Test fielders given as objects are read as plain names."""
        record = single_ball_match(0)
        record['innings'][0]['overs'][0]['deliveries'][0]['wickets'] = [
            {'player_out': 'P1', 'kind': 'caught', 'fielders': [{'name': 'F1'}, 'F2']}
        ]
        match = RawMatch.model_validate(record)
        assert match.innings[0].overs[0].deliveries[0].wickets[0].fielders == ['F1', 'F2']

    def test_save_creates_directories(self, tmp_path):
        """Test save_json creates parent directories and dumps models."""
        path = tmp_path / 'a' / 'b' / 'stats.json'
        save_json(path, PlayerStats(runs=[3]))
        assert json.loads(path.read_text())['runs'] == [3]

    def test_nan_round_trip(self, tmp_path):
        """Test an undefined average is written as null and read back as NaN."""
        path = tmp_path / 'stats.json'
        save_json(path, PlayerStats())
        assert 'NaN' not in path.read_text()
        assert json.loads(path.read_text())['average'] is None
        assert math.isnan(load_json(path, schema=PlayerStats).average)

    def test_save_rejects_bare_nan(self, tmp_path):
        """Test plain data containing NaN is refused and nothing is written."""
        path = tmp_path / 'bad.json'
        with pytest.raises(ValueError):
            save_json(path, {'average': math.nan})
        assert not path.exists()

    def test_load_safe_default(self, tmp_path):
        """Test load_json_safe returns the default for missing or invalid files."""
        assert load_json_safe(tmp_path / 'missing.json', default=[]) == []
        bad = tmp_path / 'bad.json'
        bad.write_text('nope')
        assert load_json_safe(bad, default={}) == {}


class TestRatios:
    """Tests for undefined-ratio handling."""

    def test_ratio_zero_denominator(self):
        """Test a zero denominator gives NaN instead of raising."""
        assert math.isnan(ratio(10, 0))
        assert ratio(10, 4) == 2.5

    def test_batting_average(self):
        """Test average is mean runs per innings."""
        assert batting_average([6, 4]) == 5
        assert math.isnan(batting_average([]))
