"""
Call-site source locations.

A SourceLocation is captured where a log call or an error is made, not
inside the logging machinery. capture() walks up the interpreter stack
by an explicit depth so wrappers can point past their own frames.
"""

import sys
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SourceLocation:
    """Where something happened in the source.

    Attributes:
        file: Path of the source file
        function: Name of the enclosing function
        line: Line number (1-based)
        column: Column offset, 0 when unknown
        range: Optional (start, end) character range
    """
    file: str
    function: str
    line: int
    column: int = 0
    range: Optional[Tuple[int, int]] = None

    @classmethod
    def capture(cls, depth: int = 0) -> 'SourceLocation':
        """Create a SourceLocation for the caller of capture().

        Args:
            depth: Extra frames to skip above the immediate caller
        """
        frame = sys._getframe(depth + 1)
        column = 0
        positions = getattr(frame.f_code, 'co_positions', None)
        if positions is not None:
            # Python 3.11+: map the current instruction to a column offset
            for index, pos in enumerate(positions()):
                if index == frame.f_lasti // 2:
                    column = pos[2] + 1 if pos[2] is not None else 0
                    break
        return cls(
            file=frame.f_code.co_filename,
            function=frame.f_code.co_name,
            line=frame.f_lineno,
            column=column,
        )

    @property
    def source_file(self) -> str:
        return source_file(self.file)

    def short(self) -> str:
        text = f"[{self.file}:{self.line}:{self.column}"
        if self.range is not None:
            text += f" ({self.range[0]}..<{self.range[1]})"
        return text + "]"

    def long(self) -> str:
        lines = [
            f"File: {self.file}",
            f" - func: {self.function}",
            f" - line: {self.line}",
            f" - column: {self.column}",
        ]
        if self.range is not None:
            lines.append(f" - range: {self.range[0]}..<{self.range[1]}")
        return "\n".join(lines)


def source_file(path: str) -> str:
    """Return the last '/'-separated component of a path."""
    if not path:
        return ''
    return path.split('/')[-1]
