"""Logging setup for the cricstats pipeline and CLI."""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

ROOT_LOGGER = 'cricstats'

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the 'cricstats' logger.

    Module loggers ('cricstats.store', 'cricstats.corpus', ...) propagate to
    it, so one call covers the whole pipeline. Calling it again replaces the
    previous handlers.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level, as a number or a name such as 'DEBUG'
        log_to_file: Also write a timestamped cricstats_<time>.log file
        log_to_console: Log to stderr, keeping stdout free for JSON output

    Returns:
        The configured 'cricstats' logger

    Example:
        from cricstats.logging_config import setup_logging
        logger = setup_logging(level='DEBUG')
        logger.info("Warming scorecard cache")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        file_handler = logging.FileHandler(log_dir / f'cricstats_{stamp}.log', encoding='utf-8')
        logger.addHandler(_handler(file_handler, level, FILE_FORMAT))

    if log_to_console:
        logger.addHandler(_handler(logging.StreamHandler(sys.stderr), level, CONSOLE_FORMAT))

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Logger under the 'cricstats' hierarchy.

    get_logger('store') and get_logger('cricstats.store') are the same logger.
    """
    if name != ROOT_LOGGER and not name.startswith(f'{ROOT_LOGGER}.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)


@contextmanager
def log_duration(logger: logging.Logger, message: str, level: int = logging.DEBUG) -> Iterator[None]:
    """Log ``message`` with the elapsed milliseconds once the block finishes."""
    start = time.perf_counter()
    yield
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.log(level, f'{message} in {elapsed_ms:.0f}ms')
