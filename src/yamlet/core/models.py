#!/usr/bin/env python3
"""
YAMLET CORE MODELS
------------------
Defines the fundamental data structures shared by the parsing stages.
These models represent the lowest level of document abstraction: the
preprocessed line, the immutable table of lines, and the single cursor
that walks it.

Author: Yamlet Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence


@dataclass(frozen=True)
class Line:
    """
    One logical line of the document after comment and whitespace stripping.

    Blank lines are kept so that `line_no` always matches the source file.
    """
    line_no: int            # 1-based position in the source text
    text: str               # Preprocessed text, leading whitespace preserved
    indent: int             # Column count (space = 1, tab = 2)
    content: str            # Text after the leading whitespace

    @property
    def is_blank(self) -> bool:
        return not self.text

    @property
    def is_sequence_item(self) -> bool:
        """True when the line opens with a '-' indicator ('-' then space or end)."""
        return is_dash_indicator(self.content)

    @property
    def opens_flow(self) -> bool:
        return self.content[:1] in ('[', '{')


def is_dash_indicator(text: str) -> bool:
    return text[:1] == '-' and (len(text) == 1 or text[1] in ' \t')


class LineTable:
    """
    Ordered, index-addressable sequence of preprocessed lines.
    Fixed at construction; nothing mutates it afterwards.
    """

    def __init__(self, lines: Sequence[Line]):
        self._lines = tuple(lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> Line:
        return self._lines[index]

    def __iter__(self):
        return iter(self._lines)

    @property
    def texts(self) -> List[str]:
        return [line.text for line in self._lines]

    def next_sub_indent(self, start: int, parent_indent: int) -> Optional[int]:
        """
        Indentation of the first non-blank line at or after `start`, provided
        it is strictly deeper than `parent_indent`. Returns None otherwise,
        meaning no nested block follows.
        """
        for line in self._lines[start:]:
            if line.is_blank:
                continue
            if line.indent > parent_indent:
                return line.indent
            return None
        return None

    def has_content_from(self, start: int) -> bool:
        return any(not line.is_blank for line in self._lines[start:])


class Cursor:
    """
    The one piece of mutable parse state: the index of the next unconsumed
    line. A single instance is created per parse and handed to every
    recursive routine, which either advances it past what it consumed or
    restores it to the value it had on entry.
    """

    def __init__(self, table: LineTable, position: int = 0):
        self.table = table
        self.position = position

    def __repr__(self) -> str:
        return f"Cursor(position={self.position}, lines={len(self.table)})"

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.table)

    def peek(self) -> Optional[Line]:
        if self.at_end:
            return None
        return self.table[self.position]

    def advance(self, count: int = 1) -> None:
        self.position = min(self.position + count, len(self.table))

    def skip_blank(self) -> Optional[Line]:
        """Moves past blank lines and returns the next line with content."""
        while not self.at_end and self.table[self.position].is_blank:
            self.position += 1
        return self.peek()

    def mark(self) -> int:
        return self.position

    def restore(self, mark: int) -> None:
        self.position = mark

    def next_sub_indent(self, parent_indent: int) -> Optional[int]:
        return self.table.next_sub_indent(self.position, parent_indent)


class _NoValue:
    """Sentinel for 'no value found at this indentation', distinct from None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __bool__(self) -> bool:
        return False


NO_VALUE = _NoValue()


@dataclass(frozen=True)
class FlowOutcome:
    """
    Result of a strict flow-literal parse. A failure is an ordinary value,
    so callers choose between falling back and raising.
    """
    ok: bool
    value: Any = None
    reason: str = ""

    @classmethod
    def success(cls, value: Any) -> "FlowOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> "FlowOutcome":
        return cls(ok=False, reason=reason)


@dataclass(frozen=True)
class FlowBlock:
    """Text of a balanced flow block collected by the scanner."""
    text: str
    first_line: int         # 1-based
    last_line: int          # 1-based
