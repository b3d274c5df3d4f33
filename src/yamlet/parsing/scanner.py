#!/usr/bin/env python3
"""
YAMLET SCANNER - Flow Block Collector
-------------------------------------
Collects JSON-style `[...]` / `{...}` blocks that may span several
physical lines, and hands the collected text to a strict flow-literal
parse.

Multi-line flow blocks are a best-effort layer on top of the line
grammar: every unsuccessful attempt leaves the cursor where it found it.

Author: Yamlet Team
Date: 2026-10-19
"""

import json
import logging
from typing import List, Optional

from yamlet.core.models import Cursor, FlowBlock, FlowOutcome

logger = logging.getLogger("yamlet.scanner")


class FlowLiteralParser:
    """Strict flow grammar (JSON). Failures are returned, not raised."""

    def parse(self, text: str) -> FlowOutcome:
        try:
            return FlowOutcome.success(json.loads(text))
        except ValueError as e:
            return FlowOutcome.failure(str(e))


class BracketTracker:
    """
    Tracks bracket and brace depth over a stream of characters, ignoring
    anything inside single- or double-quoted strings. String state carries
    across lines.
    """

    def __init__(self):
        self.curly = 0
        self.square = 0
        self.quote: Optional[str] = None
        self.escaped = False

    def feed(self, text: str) -> None:
        for char in text:
            if self.quote:
                if self.escaped:
                    self.escaped = False
                elif char == '\\':
                    self.escaped = True
                elif char == self.quote:
                    self.quote = None
            elif char in ('"', "'"):
                self.quote = char
            elif char == '{':
                self.curly += 1
            elif char == '}':
                self.curly -= 1
            elif char == '[':
                self.square += 1
            elif char == ']':
                self.square -= 1

    @property
    def balanced(self) -> bool:
        return self.curly <= 0 and self.square <= 0


class FlowBlockScanner:
    """
    Identifies a flow block starting at the cursor and collects its text.
    """

    def collect(self, cursor: Cursor, indent: int) -> Optional[FlowBlock]:
        """
        Starting at the cursor, gathers lines until the opened flow value
        balances. On success the cursor is left after the last collected
        line; otherwise it is restored and None is returned.

        The first non-blank line must sit exactly at `indent` and open
        with '[' or '{'. Collection stops unsuccessfully when a later line
        is shallower than `indent` or input ends unbalanced.
        """
        saved = cursor.mark()
        first = cursor.skip_blank()
        if first is None or first.indent != indent or not first.opens_flow:
            cursor.restore(saved)
            return None

        tracker = BracketTracker()
        buffer: List[str] = []

        while not cursor.at_end:
            line = cursor.peek()
            if line.indent < indent and not line.is_blank:
                break

            buffer.append(line.content)
            tracker.feed(line.content)
            cursor.advance()

            if tracker.balanced:
                logger.debug("Collected flow block on lines %d-%d", first.line_no, line.line_no)
                return FlowBlock(
                    text='\n'.join(buffer),
                    first_line=first.line_no,
                    last_line=line.line_no,
                )

        logger.debug("Unbalanced flow block starting at line %d", first.line_no)
        cursor.restore(saved)
        return None
