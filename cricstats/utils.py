"""JSON file helpers shared by the caches, config and registry."""

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import ParseError
from .logging_config import get_logger

T = TypeVar('T', bound=BaseModel)
logger = get_logger('utils')


def _read(path: Path) -> Any:
    try:
        with open(path, encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} (line {e.lineno}, column {e.colno})')
        raise ParseError(path, f'{e.msg} at line {e.lineno} column {e.colno}') from e
    except UnicodeDecodeError as e:
        logger.error(f'{path} is not UTF-8: {e}')
        raise ParseError(path, f'not UTF-8 ({e.reason})') from e


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON file, optionally validating it into a pydantic model.

    Args:
        path: File to read
        schema: Optional pydantic model class for the document

    Returns:
        The decoded document, or a ``schema`` instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the JSON is malformed or does not fit ``schema``

    Example:
        from cricstats.schemas import RawMatch
        match = load_json('datasets/cricket/tests_male_json/1000851.json', schema=RawMatch)
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f'File not found: {path}')

    data = _read(path)
    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e.error_count()} error(s)')
        raise ParseError(path, f'does not match {schema.__name__}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write ``data`` (a pydantic model or plain JSON data) to ``path``.

    Parent directories are created. The output is strict JSON: models
    dump undefined statistics as null, and a stray NaN raises ValueError.

    Raises:
        TypeError: If data is not JSON-serializable
        ValueError: If data contains NaN or infinity
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = data.model_dump() if isinstance(data, BaseModel) else data
    try:
        text = json.dumps(payload, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.error(f'Cannot serialize data for {path}: {e}')
        raise

    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.debug(f'Wrote {path}')


def load_json_safe(path: Path | str, default: Any = None, schema: type[T] | None = None) -> Any | T:
    """
    Like load_json, but return ``default`` for a missing or unreadable file.

    Example:
        names = load_json_safe('processed/all_players.json', default=[])
    """
    try:
        return load_json(path, schema=schema)
    except (FileNotFoundError, ParseError):
        return default
