"""On-disk caches: a versioned JSON store and the match record store."""

import threading
from pathlib import Path
from typing import Callable, ClassVar, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from .constants import (
    DEFAULT_BALLS_PER_OVER,
    DEFAULT_GENDER,
    MATCHES_SUBDIR,
    SCORECARD_VERSION,
    Competition,
)
from .errors import MatchNotFoundError
from .logging_config import get_logger, log_duration
from .schemas import MatchScorecard, RawMatch
from .scorecard import build_scorecard
from .utils import load_json, save_json

T = TypeVar('T', bound=BaseModel)
logger = get_logger('store')

Key = tuple[str, ...]


def _path_segment(part: str) -> str:
    """Make one key component safe to use as a file or directory name."""
    segment = str(part).replace('/', '_').replace('\\', '_').strip()
    if segment in ('', '.', '..'):
        raise ValueError(f'Invalid cache key component: {part!r}')
    return segment


class JsonStore(Generic[T]):
    """
    Identity-keyed cache of pydantic models stored as JSON files.

    A key is a tuple of path components; the last one becomes the file name
    (``('tests_male', '1000851')`` -> ``<root>/tests_male/1000851.json``).
    When ``version`` is set, a file whose ``version`` field differs is
    treated as missing so that callers rebuild it.

    Builds through ``get_or_build`` are serialized per file within the
    process; separate processes may still race (last write wins).
    """

    _locks: ClassVar[dict[Path, threading.Lock]] = {}
    _locks_guard: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, root: Path | str, schema: type[T], version: Optional[int] = None):
        self.root = Path(root)
        self.schema = schema
        self.version = version

    def path_for(self, key: Key) -> Path:
        if not key:
            raise ValueError('Cache key must not be empty')
        parts = [_path_segment(k) for k in key]
        return self.root.joinpath(*parts[:-1], f'{parts[-1]}.json')

    def get(self, key: Key) -> Optional[T]:
        """Return the cached value, or None when absent, unreadable or stale."""
        path = self.path_for(key)
        if not path.exists():
            logger.debug(f'Cache miss: {path}')
            return None

        try:
            data = load_json(path)
        except (OSError, ValueError) as e:
            logger.warning(f'Ignoring unreadable cache file {path}: {e}')
            return None

        if self.version is not None:
            found = data.get('version') if isinstance(data, dict) else None
            if found != self.version:
                logger.info(f'Stale cache file {path} (version {found}, expected {self.version})')
                return None

        try:
            value = self.schema.model_validate(data)
        except ValidationError as e:
            logger.warning(f'Ignoring cache file {path} with unexpected shape: {e}')
            return None

        logger.debug(f'Cache hit: {path}')
        return value

    def put(self, key: Key, value: T) -> Path:
        path = self.path_for(key)
        save_json(path, value)
        return path

    def delete(self, key: Key) -> bool:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            return True
        return False

    def get_or_build(
        self,
        key: Key,
        build: Callable[[], T],
        accept: Optional[Callable[[T], bool]] = None,
    ) -> T:
        """
        Serve ``key`` from the cache, building and persisting it on a miss.

        Args:
            key: Cache key
            build: Called with no arguments to produce the value on a miss
            accept: Optional extra check on a cached value; rejected values are rebuilt

        Returns:
            The cached or freshly built value
        """
        with self._lock_for(self.path_for(key)):
            cached = self.get(key)
            if cached is not None and (accept is None or accept(cached)):
                return cached
            value = build()
            self.put(key, value)
            return value

    @classmethod
    def _lock_for(cls, path: Path) -> threading.Lock:
        with cls._locks_guard:
            return cls._locks.setdefault(path.resolve(), threading.Lock())


class MatchStore:
    """
    Reads raw match records and memoizes their scorecards.

    Raw files live at ``<dataset_dir>/<competition>_<gender>_json/<id>.json``;
    scorecards are cached at
    ``<processed_dir>/matches/<competition>_<gender>/<id>.json``.
    """

    def __init__(
        self,
        dataset_dir: Path | str,
        processed_dir: Path | str,
        gender: str = DEFAULT_GENDER,
        balls_per_over: int = DEFAULT_BALLS_PER_OVER,
    ):
        self.dataset_dir = Path(dataset_dir)
        self.processed_dir = Path(processed_dir)
        self.gender = gender
        self.balls_per_over = balls_per_over
        self.cache: JsonStore[MatchScorecard] = JsonStore(
            self.processed_dir / MATCHES_SUBDIR, MatchScorecard, version=SCORECARD_VERSION
        )

    @classmethod
    def from_config(cls, gender: Optional[str] = None) -> 'MatchStore':
        """Create a store using the directories from the active config."""
        from .config import get_config, get_dataset_dir, get_processed_dir

        config = get_config()
        return cls(
            get_dataset_dir(),
            get_processed_dir(),
            gender=gender or config.default_gender,
            balls_per_over=config.balls_per_over,
        )

    def for_gender(self, gender: str) -> 'MatchStore':
        """A store over the same directories for another gender."""
        if gender == self.gender:
            return self
        return MatchStore(self.dataset_dir, self.processed_dir, gender, self.balls_per_over)

    def raw_dir(self, competition: Competition) -> Path:
        key = Competition.parse(competition).dataset_key(self.gender)
        return self.dataset_dir / f'{key}_json'

    def raw_path(self, competition: Competition, match_id: str) -> Path:
        return self.raw_dir(competition) / f'{match_id}.json'

    def _cache_key(self, competition: Competition, match_id: str) -> Key:
        return (Competition.parse(competition).dataset_key(self.gender), str(match_id))

    def scorecard_path(self, competition: Competition, match_id: str) -> Path:
        return self.cache.path_for(self._cache_key(competition, match_id))

    def match_ids(self, competition: Competition) -> list[str]:
        """
        Match ids available for a competition, sorted by file name.

        This is file listing order, not match-date order.
        """
        competition = Competition.parse(competition)
        directory = self.raw_dir(competition)
        if not directory.is_dir():
            logger.warning(f'No dataset directory for {competition.value}: {directory}')
            return []
        return [p.stem for p in sorted(directory.glob('*.json')) if p.is_file()]

    def load_raw(self, competition: Competition, match_id: str) -> RawMatch:
        """
        Load and validate a raw match record.

        Raises:
            MatchNotFoundError: If the raw file doesn't exist
            ParseError: If the file is malformed or fails validation
        """
        competition = Competition.parse(competition)
        path = self.raw_path(competition, match_id)
        if not path.is_file():
            raise MatchNotFoundError(competition.dataset_key(self.gender), str(match_id), path)
        return load_json(path, schema=RawMatch)

    def build(self, competition: Competition, match_id: str) -> MatchScorecard:
        """Build a scorecard from the raw record, bypassing the cache."""
        return build_scorecard(self.load_raw(competition, match_id), self.balls_per_over)

    def get_or_build(self, competition: Competition, match_id: str) -> MatchScorecard:
        """
        Return the cached scorecard for a match, building it on a miss.

        A cached scorecard with a different schema version is rebuilt.
        """
        competition = Competition.parse(competition)

        def build() -> MatchScorecard:
            logger.info(f'Processing match {match_id} from {competition.dataset_key(self.gender)}')
            with log_duration(logger, f'Built scorecard for {match_id}'):
                return self.build(competition, match_id)

        return self.cache.get_or_build(self._cache_key(competition, match_id), build)
