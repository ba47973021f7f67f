"""Logging configuration and per-row progress tracking."""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TypeVar

from tqdm import tqdm

T = TypeVar("T")

LOGGER_NAME = "simprep"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Handlers installed by setup_logging; replaced on every call.
_handlers: List[logging.Handler] = []


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: str = LOG_FORMAT,
) -> logging.Logger:
    """Configure the ``simprep`` logger with a stderr and optional file handler.

    Calling it again swaps out the handlers from the previous call, so each
    CLI invocation logs to its own stderr and its own ``log_file``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    while _handlers:
        handler = _handlers.pop()
        logger.removeHandler(handler)
        handler.close()

    _handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        _handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(log_format)
    for handler in _handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


@contextmanager
def log_duration(logger: logging.Logger, what: str) -> Iterator[None]:
    """Log at DEBUG how long the enclosed block took."""
    start = time.time()
    yield
    logger.debug(f"{what} took {time.time() - start:.2f}s")


def progress_bar(
    iterable: Iterable[T],
    total: Optional[int] = None,
    desc: str = "",
    disable: bool = False,
) -> Iterable[T]:
    """Wrap ``iterable`` in a tqdm bar counting matrix rows."""
    return tqdm(iterable, total=total, desc=desc, disable=disable, unit="row",
                leave=False)
