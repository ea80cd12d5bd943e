"""
Function tracing decorator.

Routes trace output through a dispatcher (the module-level singleton by
default) at VERBOSE level, so tracing follows the same gates as every
other log call.
"""

import functools
import inspect
from pathlib import Path

from .levels import LoggerLevel


def _short_repr(value, name=None):
    prefix = f"{name}=" if name else ''
    if isinstance(value, Path):
        return f"{prefix}Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"{prefix}'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"{prefix}[...{len(value)} items...]"
    return f"{prefix}{value!r}"


def _first_param(func):
    try:
        params = list(inspect.signature(func).parameters)
    except (TypeError, ValueError):
        return None
    return params[0] if params else None


def trace(func=None, *, logger=None, level=LoggerLevel.VERBOSE):
    """Decorator to trace function calls through a dispatcher.

    Logs entry with arguments, exit with the return value (if not None)
    and any exception raised. Arguments are only formatted when the
    dispatcher would accept `level`.

    Usage::

        @trace
        def load(path): ...

        @trace(logger=my_logger, level=LoggerLevel.DEBUG)
        def save(path, data): ...
    """
    if func is None:
        return functools.partial(trace, logger=logger, level=level)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger is None:
            # Lazy import to avoid circular dependency
            from .manager import get_logger
            out = get_logger()
        else:
            out = logger

        if not out.is_allowed_to_log(level):
            return func(*args, **kwargs)

        module = inspect.getmodule(func)
        module_name = module.__name__ if module else "unknown"
        func_name = func.__qualname__

        args_repr = []
        remaining_args = args
        # Methods: show the bound instance as 'self'
        if args and _first_param(func) in ('self', 'cls'):
            args_repr.append(_first_param(func))
            remaining_args = args[1:]
        args_repr.extend(_short_repr(arg) for arg in remaining_args)
        args_repr.extend(_short_repr(value, key) for key, value in kwargs.items())
        args_str = ', '.join(args_repr)

        out.log(f"[TRACE] >> {module_name}.{func_name}({args_str})", level,
                stacklevel=2)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            out.log(f"[TRACE] !! {module_name}.{func_name} raised: "
                    f"{type(e).__name__}: {e}", level, stacklevel=2)
            raise

        if result is not None:
            out.log(f"[TRACE] << {module_name}.{func_name} returned: "
                    f"{_short_repr(result)}", level, stacklevel=2)
        return result

    return wrapper
