"""
Colour, glyph and timestamp tables used when rendering log lines.

These are injectable collaborators: a sink holds an optional
LoggerColorConfiguration and an optional LoggerDescriptionConfiguration.
When either is missing the corresponding decoration is simply omitted.

Presets:
    LoggerColorConfiguration.LINUX    - ANSI escape prefixes per level
    LoggerColorConfiguration.DEFAULT  - identity (no colour)
    LoggerDescriptionConfiguration.DEFAULT - emoji glyph per level
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Mapping, Optional

from .levels import LoggerLevel


ColorFunction = Callable[[str], str]


def _identity(text: str) -> str:
    return text


def _ansi(code: str) -> ColorFunction:
    """Colour prefix plus a reset suffix so colour ends with the line."""
    prefix = f"\x1b[{code}m"

    def wrap(text: str) -> str:
        return f"{prefix}{text}\x1b[0m"
    return wrap


@dataclass(frozen=True)
class LoggerColorConfiguration:
    """Per-level text wrappers applied to a rendered line."""
    disable: ColorFunction = _identity
    debug: ColorFunction = _identity
    info: ColorFunction = _identity
    warning: ColorFunction = _identity
    error: ColorFunction = _identity
    fatal_error: ColorFunction = _identity
    verbose: ColorFunction = _identity
    description: str = 'LoggerColorConfiguration'

    def function_for(self, level: LoggerLevel) -> ColorFunction:
        return getattr(self, level.name.lower())

    def color(self, level: LoggerLevel, text: str) -> str:
        """Wrap `text` with the colour function for `level`."""
        return self.function_for(level)(text)

    def __str__(self):
        return self.description


LoggerColorConfiguration.LINUX = LoggerColorConfiguration(
    disable=_ansi('0;30'),
    debug=_ansi('0;33'),
    info=_ansi('0;34'),
    warning=_ansi('0;33'),
    error=_ansi('0;31'),
    fatal_error=_ansi('0;35'),
    verbose=_ansi('0;32'),
    description='linux',
)

LoggerColorConfiguration.DEFAULT = LoggerColorConfiguration(description='default')


@dataclass(frozen=True)
class LoggerDescriptionConfiguration:
    """Level → display glyph table."""
    configuration: Mapping[LoggerLevel, str] = field(default_factory=dict)

    def describe(self, level: LoggerLevel) -> str:
        return self.configuration.get(level, '')


LoggerDescriptionConfiguration.DEFAULT = LoggerDescriptionConfiguration(
    configuration={
        LoggerLevel.DISABLE: '⛔️',
        LoggerLevel.ERROR: '‼️',
        LoggerLevel.INFO: 'ℹ️',
        LoggerLevel.DEBUG: '💬',
        LoggerLevel.VERBOSE: '🔬',
        LoggerLevel.WARNING: '⚠️',
        LoggerLevel.FATAL_ERROR: '🔥',
    }
)


def describe_level(level: LoggerLevel,
                   configuration: Optional[LoggerDescriptionConfiguration]) -> str:
    """Glyph for `level`, or '' when no table is configured."""
    if configuration is None:
        return ''
    return configuration.describe(level)


# Colour presets by description name, used by config resolution
COLOR_PRESETS: Dict[str, LoggerColorConfiguration] = {
    'linux': LoggerColorConfiguration.LINUX,
    'default': LoggerColorConfiguration.DEFAULT,
}


def get_color_configuration(name: Optional[str]) -> Optional[LoggerColorConfiguration]:
    """Look up a colour preset by name.

    None, '' and 'none' mean no colour configuration at all.

    Raises:
        ValueError: if the name matches no preset.
    """
    if name is None or name == '' or str(name).lower() == 'none':
        return None
    try:
        return COLOR_PRESETS[str(name).lower()]
    except KeyError:
        raise ValueError(f"Unknown color configuration: {name!r}") from None


def format_color_presets() -> str:
    """Format the colour presets for display.

    Returns:
        One line per preset, each level rendered with its colour.
    """
    lines = ["Available color configurations:"]
    max_name = max(len(name) for name in COLOR_PRESETS)
    for name in sorted(COLOR_PRESETS):
        cfg = COLOR_PRESETS[name]
        sample = ' '.join(cfg.color(level, level.name.lower())
                          for level in LoggerLevel if level != LoggerLevel.DISABLE)
        lines.append(f"  {name:<{max_name}}  {sample}")
    return "\n".join(lines)


def logger_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a timestamp as ``yyyy-MM-dd hh:mm:ssSSS``.

    Hours are on the 12-hour clock and milliseconds follow the seconds
    with no separator.
    """
    moment = moment or datetime.now()
    return moment.strftime('%Y-%m-%d %I:%M:%S') + f"{moment.microsecond // 1000:03d}"
