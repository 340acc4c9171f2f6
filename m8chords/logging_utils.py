"""Logging for preset generation.

Console output stays terse; the log file records which output root and chord
each generation message belongs to. Generation code passes those through
``extra={"output_root": ..., "chord": ...}``; other records show ``-``.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

_LOGGER = logging.getLogger("m8chords.logging")
_PACKAGE_LOGGER = "m8chords"
_LOG_DIR_ENV = "M8CHORDS_LOG_DIR"
_DEBUG_ENV = "M8CHORDS_DEBUG"
_LOG_FILE = "m8chords.log"
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(output_root)s/%(chord)s %(name)s: %(message)s"
_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_CONTEXT_FIELDS = ("output_root", "chord")


class GenerationContextFilter(logging.Filter):
    """Fill the generation fields the file format expects."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in _CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, "-")
        return True


def generation_context(output_root: Path, chord: str) -> dict[str, str]:
    return {"output_root": str(output_root), "chord": chord}


def get_log_dir() -> Path:
    configured = os.environ.get(_LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "m8chords" / "logs"


def get_log_path() -> Path:
    return get_log_dir() / _LOG_FILE


def _file_handler(logger: logging.Logger) -> logging.FileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler
    return None


def configure_logging() -> Path | None:
    """Attach console and file handlers to the ``m8chords`` logger.

    Handlers from an earlier call are replaced. Returns the log file path, or
    ``None`` when the log directory cannot be created.
    """

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream=sys.__stderr__)
    console.setLevel(logging.DEBUG if os.environ.get(_DEBUG_ENV) else logging.INFO)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    path = get_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        _LOGGER.warning("File logging disabled, cannot open %s: %s", path, exc)
        return None
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(GenerationContextFilter())
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATE_FORMAT))
    logger.addHandler(file_handler)
    return path


def log_exception(context: str, exc: BaseException) -> Path | None:
    """Record ``exc`` with its traceback in the log file, if one is configured."""

    logger = logging.getLogger(_PACKAGE_LOGGER)
    handler = _file_handler(logger)
    if handler is None:
        return None
    record = logger.makeRecord(
        _LOGGER.name,
        logging.ERROR,
        __file__,
        0,
        "%s failed: %s: %s",
        (context, type(exc).__name__, exc),
        (type(exc), exc, exc.__traceback__),
    )
    handler.handle(record)
    return Path(handler.baseFilename)
