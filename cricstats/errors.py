"""Exception types raised by the statistics pipeline."""


class CricstatsError(Exception):
    """Base class for cricstats errors."""


class NotFoundError(CricstatsError, LookupError):
    """A requested match or player does not exist."""


class MatchNotFoundError(NotFoundError, FileNotFoundError):
    """The raw match file for a (competition, match id) pair is missing."""

    def __init__(self, competition: str, match_id: str, path=None):
        self.competition = competition
        self.match_id = match_id
        self.path = path
        super().__init__(f'Match {match_id} not found in {competition} ({path})')


class PlayerNotFoundError(NotFoundError):
    """The player does not appear anywhere in the corpus."""

    def __init__(self, player_name: str):
        self.player_name = player_name
        super().__init__(f'Player not found: {player_name}')


class ParseError(CricstatsError, ValueError):
    """A JSON file is malformed or does not match the expected schema."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f'Could not parse {path}: {reason}')
