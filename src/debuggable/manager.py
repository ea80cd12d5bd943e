"""
Module-level dispatcher singleton.

Applications that want one shared logger call init_logger() once at
startup and get_logger() everywhere else:

    from debuggable import init_logger, get_logger, ConsoleLoggerService

    init_logger(services=['console:warning'])
    get_logger().log_warning("low disk space")

Without init_logger(), get_logger() returns a dispatcher built from the
project/global config files and the built-in defaults.
"""

import threading
from typing import Any, Optional

from .config import build_from_config
from .dispatcher import LoggerServiceDefault
from .logger_queue import LoggerQueue


_logger: Optional[LoggerServiceDefault] = None
_lock = threading.Lock()


def init_logger(start_dir=None, queue: Optional[LoggerQueue] = None,
                file=None, **overrides: Any) -> LoggerServiceDefault:
    """Initialize the module-level dispatcher singleton.

    Args:
        start_dir: Directory to start the .debuggable.json search from
        queue: Execution queue (None uses the shared thread pool)
        file: Output stream for console sinks (default stdout)
        **overrides: Config values taking precedence over config files

    Returns:
        The initialized LoggerServiceDefault instance
    """
    global _logger
    logger = build_from_config(start_dir=start_dir, queue=queue, file=file,
                               **overrides)
    with _lock:
        _logger = logger
    return logger


def set_logger(logger: Optional[LoggerServiceDefault]) -> None:
    """Install an externally built dispatcher as the singleton (None clears it)."""
    global _logger
    with _lock:
        _logger = logger


def get_logger() -> LoggerServiceDefault:
    """Get the module-level dispatcher, creating a default if needed."""
    global _logger
    with _lock:
        if _logger is None:
            _logger = build_from_config()
        return _logger


def reset_logger() -> None:
    """Forget the singleton so the next get_logger() rebuilds it."""
    set_logger(None)
