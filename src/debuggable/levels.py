"""
Logger level ranks for the dispatcher gate.

The emit rule mirrors a threshold check:

    floor != DISABLE  and  level != DISABLE  and  level <= floor  →  emitted

The floor is either a sink's own min_logger_level or the dispatcher's.

Rank order (declared order, kept as-is):
    0        1      2     3        4      5            6
    disable  debug  info  warning  error  fatal_error  verbose

VERBOSE ranks after FATAL_ERROR, so a floor of FATAL_ERROR lets everything
through except VERBOSE, and only a VERBOSE floor lets VERBOSE through.
"""

from enum import IntEnum
from typing import Union


class LoggerLevel(IntEnum):
    """Log level. DISABLE is a floor only, never an emission level."""

    DISABLE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    FATAL_ERROR = 5
    VERBOSE = 6


# Alternate spellings accepted by parse_level()
_ALIASES = {
    'disabled': LoggerLevel.DISABLE,
    'didabled': LoggerLevel.DISABLE,
    'off': LoggerLevel.DISABLE,
    'none': LoggerLevel.DISABLE,
    'warn': LoggerLevel.WARNING,
    'fatal': LoggerLevel.FATAL_ERROR,
    'fatalerror': LoggerLevel.FATAL_ERROR,
    'critical': LoggerLevel.FATAL_ERROR,
}


def is_allowed_to_log(level: LoggerLevel, floor: LoggerLevel) -> bool:
    """Return True when a message at `level` passes a gate set to `floor`."""
    if floor == LoggerLevel.DISABLE or level == LoggerLevel.DISABLE:
        return False
    return int(level) <= int(floor)


def parse_level(value: Union[LoggerLevel, int, str]) -> LoggerLevel:
    """Coerce a level name, rank or LoggerLevel into a LoggerLevel.

    Names are case-insensitive and accept snake_case, camelCase and
    kebab-case (``fatal_error``, ``fatalError``, ``fatal-error``).

    Raises:
        ValueError: if the value names no known level.
    """
    if isinstance(value, LoggerLevel):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a logger level: {value!r}")
    if isinstance(value, int):
        return LoggerLevel(value)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip('-').isdigit():
            return LoggerLevel(int(text))
        key = text.replace('-', '_').lower()
        if key.upper() in LoggerLevel.__members__:
            return LoggerLevel[key.upper()]
        squashed = key.replace('_', '')
        if squashed in _ALIASES:
            return _ALIASES[squashed]
        if key in _ALIASES:
            return _ALIASES[key]
    raise ValueError(f"Unknown logger level: {value!r}")
