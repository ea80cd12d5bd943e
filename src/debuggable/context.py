"""
Named log contexts.

A context is an opaque tag attached to a log call. Sinks and dispatchers
carry a set of contexts they care about; an empty set means "all".
The empty context (name == "") stands for "no context" and always matches.

Any object with a ``name`` attribute can be used as a context, so
application enums or small classes work without wrapping.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class LoggerContext:
    """A named scope for log routing. Equality is by name."""
    name: str = ''

    def __str__(self):
        return self.name


EMPTY_CONTEXT = LoggerContext('')


def context_name(context: Optional[Any]) -> str:
    """Return the name of a context-like object ('' for None)."""
    if context is None:
        return ''
    return str(getattr(context, 'name', context) or '')


def context_matches(contexts: Iterable[Any], context: Optional[Any]) -> bool:
    """Check whether `context` is accepted by a set of `contexts`.

    Args:
        contexts: Contexts a sink or dispatcher is interested in.
        context: Context of the log call (None or empty = no context)

    Returns:
        True if contexts is empty, the call has no context, or a
        context with the same name is present.
    """
    name = context_name(context)
    if not name:
        return True
    names = {context_name(c) for c in contexts}
    if not names:
        return True
    return name in names
