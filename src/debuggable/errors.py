"""
Debuggable - rich, human-readable metadata for exceptions.

Mix Debuggable into an exception class and provide ``identifier`` and
``reason``; everything else has an empty default.

Usage::

    class StorageError(Debuggable, Exception):
        def __init__(self, identifier, reason):
            self.identifier = identifier
            self.reason = reason
            self.capture_stack_trace()
            super().__init__(reason)

        suggested_fixes = ("Check the disk is mounted.",)

    err = StorageError('notFound', 'The file was not found.')
    str(err)              # short form, one line
    err.debug_description # long form, multi-line

Without capture_stack_trace(), stack_trace falls back to the traceback of
the raised error, or to the stack at the point it is read.
"""

import traceback
from enum import Enum
from typing import List, Optional, Sequence

from .source_location import SourceLocation


class HelpFormat(Enum):
    """Rendering options for Debuggable help text."""
    SHORT = 'short'
    LONG = 'long'


def bulleted_list(items) -> str:
    """Render items as '\\n- item' lines."""
    return ''.join(f"\n- {item}" for item in items)


def make_stack_trace(skip: int = 1) -> List[str]:
    """Capture the current call stack as formatted strings.

    Args:
        skip: Innermost frames to drop (1 drops make_stack_trace itself)
    """
    frames = traceback.format_stack()
    if skip:
        frames = frames[:-skip]
    return [f.rstrip('\n') for f in frames]


class Debuggable:
    """Mixin giving an exception identifier, reason, causes, fixes and links."""

    identifier: str = ''
    reason: str = ''
    possible_causes: Sequence[str] = ()
    suggested_fixes: Sequence[str] = ()
    documentation_links: Sequence[str] = ()
    stack_overflow_questions: Sequence[str] = ()
    github_issues: Sequence[str] = ()
    source_location: Optional[SourceLocation] = None

    def capture_stack_trace(self) -> None:
        """Record the current call stack. Call this from the error's __init__."""
        self._stack_trace = make_stack_trace(skip=2)

    # -- Type-level names ----------------------------------------------------

    @classmethod
    def type_identifier(cls) -> str:
        """Unique identifier for the error type (defaults to the class name)."""
        return cls.__qualname__.split('.')[-1]

    @classmethod
    def readable_name(cls) -> str:
        """Readable name printed before the reason."""
        return cls.type_identifier()

    # -- Computed ------------------------------------------------------------

    @property
    def full_identifier(self) -> str:
        return f"{self.type_identifier()}.{self.identifier}"

    @property
    def stack_trace(self) -> Optional[List[str]]:
        """Captured stack, else the traceback of a raised error, else the current stack."""
        captured = self.__dict__.get('_stack_trace')
        if captured is not None:
            return captured
        tb = getattr(self, '__traceback__', None)
        if tb is not None:
            return [f.rstrip('\n') for f in traceback.format_tb(tb)]
        return make_stack_trace(skip=2)

    @property
    def failure_reason(self) -> str:
        return self.reason

    @property
    def recovery_suggestion(self) -> Optional[str]:
        return self.suggested_fixes[0] if self.suggested_fixes else None

    @property
    def help_anchor(self) -> Optional[str]:
        return self.documentation_links[0] if self.documentation_links else None

    @property
    def debug_description(self) -> str:
        return self.debuggable_help(HelpFormat.LONG)

    @property
    def description(self) -> str:
        return self.debuggable_help(HelpFormat.SHORT)

    def __str__(self):
        return self.description

    # -- Rendering -----------------------------------------------------------

    def debuggable_help(self, format: HelpFormat = HelpFormat.LONG) -> str:
        """Describe why the error occurred and how to address it.

        Args:
            format: HelpFormat.SHORT for one line, HelpFormat.LONG for
                a multi-paragraph report.

        Returns:
            The rendered help text.
        """
        long = format == HelpFormat.LONG
        parts = []

        if long:
            parts.append(f"⚠️ {self.readable_name()}: {self.reason}\n- id: {self.full_identifier}")
        else:
            parts.append(f"⚠️ [{self.full_identifier}: {self.reason}]")

        source = self.source_location
        if source is not None:
            parts.append(source.long() if long else source.short())

        if long:
            if self.possible_causes:
                parts.append("Here are some possible causes: "
                             + bulleted_list(self.possible_causes))
            if self.suggested_fixes:
                parts.append("These suggestions could address the issue: "
                             + bulleted_list(self.suggested_fixes))
            if self.documentation_links:
                parts.append("The documentation talks about this: "
                             + bulleted_list(self.documentation_links))
            if self.stack_overflow_questions:
                parts.append("These Stack Overflow links might be helpful: "
                             + bulleted_list(self.stack_overflow_questions))
            if self.github_issues:
                parts.append("See these Github issues for discussion on this topic: "
                             + bulleted_list(self.github_issues))
            return "\n\n".join(parts) + "\n"

        if self.possible_causes:
            parts.append(f"[Possible causes: {' '.join(self.possible_causes)}]")
        if self.suggested_fixes:
            parts.append(f"[Suggested fixes: {' '.join(self.suggested_fixes)}]")
        return ' '.join(parts)
