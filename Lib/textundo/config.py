"""
textundo configuration, read from environment variables:

    TEXTUNDO_HISTORY_DEPTH  max snapshots per undo/redo stack (0 or "none": no limit)
    TEXTUNDO_ENCODING       encoding used to read and write text files
    TEXTUNDO_PATTERN        file name pattern used by search and index
    TEXTUNDO_LOG_LEVEL      logging level name
"""
from dataclasses import dataclass
import codecs
import logging
import os


DEFAULT_HISTORY_DEPTH = 100
DEFAULT_ENCODING = "utf-8"
DEFAULT_PATTERN = "*.txt"
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:

    historyDepth: int = DEFAULT_HISTORY_DEPTH  # None means unbounded
    encoding: str = DEFAULT_ENCODING
    pattern: str = DEFAULT_PATTERN
    logLevel: str = DEFAULT_LOG_LEVEL


def _parseDepth(value):
    value = value.strip().lower()
    if value in ("", "0", "none"):
        return None
    try:
        depth = int(value)
    except ValueError:
        raise ConfigError(f"TEXTUNDO_HISTORY_DEPTH must be an integer, got {value!r}")
    if depth < 0:
        raise ConfigError(f"TEXTUNDO_HISTORY_DEPTH can't be negative, got {depth}")
    return depth


def loadSettings(environ=None):
    if environ is None:
        environ = os.environ
    depth = _parseDepth(environ.get("TEXTUNDO_HISTORY_DEPTH", str(DEFAULT_HISTORY_DEPTH)))
    encoding = environ.get("TEXTUNDO_ENCODING", DEFAULT_ENCODING)
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ConfigError(f"unknown TEXTUNDO_ENCODING {encoding!r}")
    pattern = environ.get("TEXTUNDO_PATTERN", DEFAULT_PATTERN) or DEFAULT_PATTERN
    logLevel = environ.get("TEXTUNDO_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(logLevel), int):
        raise ConfigError(f"unknown TEXTUNDO_LOG_LEVEL {logLevel!r}")
    return Settings(depth, encoding, pattern, logLevel)
