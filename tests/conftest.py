"""Shared test fixtures for cricstats tests."""

import json
from pathlib import Path

import pytest

from cricstats.corpus import CorpusWalker
from cricstats.store import MatchStore


class Dataset:
    """A temporary raw dataset plus processed-cache directory."""

    def __init__(self, root: Path):
        self.raw_dir = root / 'datasets'
        self.processed_dir = root / 'processed'
        self.raw_dir.mkdir()

    def path(self, competition: str, match_id: str, gender: str = 'male') -> Path:
        return self.raw_dir / f'{competition}_{gender}_json' / f'{match_id}.json'

    def write(self, competition: str, match_id: str, record: dict, gender: str = 'male') -> Path:
        return self.write_text(competition, match_id, json.dumps(record), gender)

    def write_text(self, competition: str, match_id: str, text: str, gender: str = 'male') -> Path:
        path = self.path(competition, match_id, gender)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        return path

    def store(self, gender: str = 'male') -> MatchStore:
        return MatchStore(self.raw_dir, self.processed_dir, gender=gender)


@pytest.fixture
def dataset(tmp_path) -> Dataset:
    return Dataset(tmp_path)


@pytest.fixture
def store(dataset) -> MatchStore:
    return dataset.store()


@pytest.fixture
def walker(store) -> CorpusWalker:
    return CorpusWalker(store)
