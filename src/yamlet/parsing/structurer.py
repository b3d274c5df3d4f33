#!/usr/bin/env python3
"""
YAMLET STRUCTURER - Recursive Descent Engine
--------------------------------------------
Builds the value tree from the LineTable. Indentation drives every
decision: a line shallower than the active block ends it, a line at the
same width continues it, a deeper line belongs to a nested block.

All routines share one Cursor. Each either advances it past what it
consumed or leaves it untouched.

Author: Yamlet Team
Date: 2026-10-19
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from yamlet.core.config import DEFAULT_OPTIONS, ParserOptions
from yamlet.core.errors import YamlStructureError
from yamlet.core.models import NO_VALUE, Cursor, Line, is_dash_indicator
from yamlet.parsing.scalars import ScalarInterpreter
from yamlet.parsing.scanner import FlowBlockScanner, FlowLiteralParser

logger = logging.getLogger("yamlet.structurer")

MIXED_ROOT_MESSAGE = "Cannot mix sequences and mappings at root level"


def find_separator(text: str) -> int:
    """
    Index of the key/value ':' in `text`, or -1. The separator is a ':'
    followed by whitespace or the end of the text. A leading quoted key
    is skipped so it may contain ': ' itself.
    """
    start = 0
    if text[:1] in ('"', "'"):
        quote = text[0]
        i = 1
        while i < len(text):
            if text[i] == '\\' and quote == '"':
                i += 2
                continue
            if text[i] == quote:
                start = i + 1
                break
            i += 1

    idx = text.find(':', start)
    while idx != -1:
        if idx + 1 == len(text) or text[idx + 1] in ' \t':
            return idx
        idx = text.find(':', idx + 1)
    return -1


def split_key_value(text: str) -> Optional[Tuple[str, str]]:
    """Splits 'key: value' into trimmed parts; None when no separator exists."""
    idx = find_separator(text)
    if idx == -1:
        return None
    return text[:idx].rstrip(' \t'), text[idx + 1:].strip(' \t')


class YamlStructurer:
    """
    Mapping / sequence / scalar dispatch over the shared cursor.
    Holds no per-document state, so one instance can serve many parses.
    """

    def __init__(self, options: ParserOptions = DEFAULT_OPTIONS):
        self.options = options
        self.flow_parser = FlowLiteralParser()
        self.scanner = FlowBlockScanner()
        self.interpreter = ScalarInterpreter(self.flow_parser)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _parse_nested_block(self, cursor: Cursor, parent_indent: int,
                            subject: str, line_no: int) -> Any:
        """Parses the block that must follow an empty key or item."""
        sub_indent = cursor.next_sub_indent(parent_indent)
        if sub_indent is None:
            raise YamlStructureError(f"Expected indented block for {subject}", line_no)

        value = self.parse_value(cursor, sub_indent)
        if value is NO_VALUE:
            raise YamlStructureError(f"Failed to parse block for {subject}", line_no)
        return value

    def _store_entry(self, cursor: Cursor, target: Dict[str, Any], key: str,
                     value_text: str, parent_indent: int, line_no: int) -> None:
        # Duplicate keys: the later entry overwrites the earlier one.
        if value_text:
            target[key] = self.interpreter.interpret(value_text, line_no)
        else:
            target[key] = self._parse_nested_block(cursor, parent_indent, f"key '{key}'", line_no)

    def _try_flow_block(self, cursor: Cursor, indent: int) -> Any:
        """Collects and strictly parses a multi-line flow block, or returns NO_VALUE."""
        saved = cursor.mark()
        block = self.scanner.collect(cursor, indent)
        if block is None:
            return NO_VALUE

        outcome = self.flow_parser.parse(block.text)
        if outcome.ok:
            return outcome.value

        logger.debug("Flow block at lines %d-%d is not valid flow syntax (%s); "
                     "reading it as block style", block.first_line, block.last_line, outcome.reason)
        cursor.restore(saved)
        return NO_VALUE

    # ------------------------------------------------------------------
    # Productions
    # ------------------------------------------------------------------

    def parse_value(self, cursor: Cursor, indent: int) -> Any:
        """
        Parses whatever value starts at `indent`: a flow block, a sequence,
        a mapping or a single scalar line. Returns NO_VALUE when the input
        ends or dedents before any content at `indent` is found.
        """
        while True:
            line = cursor.skip_blank()
            if line is None or line.indent < indent:
                return NO_VALUE

            if line.indent > indent:
                logger.debug("Skipping over-indented line %d", line.line_no)
                cursor.advance()
                continue

            if self.options.flow_blocks and line.opens_flow:
                value = self._try_flow_block(cursor, indent)
                if value is not NO_VALUE:
                    return value

            if line.is_sequence_item:
                return self.parse_sequence(cursor, indent)
            if find_separator(line.content) != -1:
                return self.parse_mapping(cursor, indent)

            cursor.advance()
            return self.interpreter.interpret(line.content, line.line_no)

    def parse_mapping(self, cursor: Cursor, indent: int) -> Dict[str, Any]:
        """
        Consumes `key: value` lines at exactly `indent`. Stops without
        consuming at a dedent, a deeper line, or a line that is not an entry.
        """
        mapping: Dict[str, Any] = {}

        while True:
            line = cursor.skip_blank()
            if line is None or line.indent != indent or line.is_sequence_item:
                break

            entry = split_key_value(line.content)
            if entry is None:
                break

            cursor.advance()
            key, value_text = entry
            self._store_entry(cursor, mapping, key, value_text, indent, line.line_no)

        return mapping

    def parse_sequence(self, cursor: Cursor, indent: int) -> List[Any]:
        """
        Consumes '- item' lines at exactly `indent`. An item may be a nested
        block, an inline nested sequence, an inline mapping or a scalar.
        """
        sequence: List[Any] = []

        while True:
            line = cursor.skip_blank()
            if line is None or line.indent != indent or not line.is_sequence_item:
                break

            cursor.advance()
            remainder = line.content[1:].lstrip(' \t')

            if not remainder:
                sequence.append(self._parse_nested_block(
                    cursor, indent, "sequence item", line.line_no))
            elif is_dash_indicator(remainder):
                sequence.append(self._parse_inline_sequence(cursor, remainder, indent, line))
            elif remainder[0] in ('[', '{'):
                sequence.append(self.interpreter.interpret(remainder, line.line_no))
            elif find_separator(remainder) != -1:
                sequence.append(self._parse_inline_mapping(cursor, remainder, indent, line))
            else:
                sequence.append(self.interpreter.interpret(remainder, line.line_no))

        return sequence

    def _parse_inline_sequence(self, cursor: Cursor, remainder: str,
                               indent: int, line: Line) -> List[Any]:
        """
        '- - a - b' style items: fragments split on ' -', then continuation
        dashes on following lines at one consistent deeper indentation.
        """
        nested: List[Any] = []

        remaining = remainder
        while remaining.startswith('-'):
            remaining = remaining[1:].lstrip(' \t')
            next_dash = remaining.find(' -')
            if next_dash != -1:
                item = remaining[:next_dash]
                remaining = remaining[next_dash + 1:].lstrip(' \t')
            else:
                item, remaining = remaining, ''
            if item:
                nested.append(self.interpreter.interpret(item, line.line_no))

        sub_indent: Optional[int] = None
        while True:
            nxt = cursor.skip_blank()
            if nxt is None or nxt.indent <= indent or not nxt.is_sequence_item:
                break
            if sub_indent is None:
                sub_indent = nxt.indent
            elif nxt.indent != sub_indent:
                raise YamlStructureError(
                    "Inconsistent indentation in nested sequence continuation", nxt.line_no)

            cursor.advance()
            nested.append(self.interpreter.interpret(nxt.content[1:].lstrip(' \t'), nxt.line_no))

        return nested

    def _parse_inline_mapping(self, cursor: Cursor, remainder: str,
                              indent: int, line: Line) -> Dict[str, Any]:
        """
        '- key: value' items: the first entry comes from the item line, further
        entries from following lines at one consistent deeper indentation.
        """
        mapping: Dict[str, Any] = {}
        key, value_text = split_key_value(remainder)
        self._store_entry(cursor, mapping, key, value_text, indent, line.line_no)

        key_indent: Optional[int] = None
        while True:
            nxt = cursor.skip_blank()
            if nxt is None or nxt.indent <= indent or nxt.is_sequence_item:
                break

            entry = split_key_value(nxt.content)
            if entry is None:
                break

            if key_indent is None:
                key_indent = nxt.indent
            elif nxt.indent != key_indent:
                break

            cursor.advance()
            next_key, next_value = entry
            self._store_entry(cursor, mapping, next_key, next_value, key_indent, nxt.line_no)

        return mapping

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def parse_document(self, cursor: Cursor) -> Any:
        """
        Parses the whole table from the first line. A document is a root
        mapping, a root sequence, a single flow literal or a single scalar.
        """
        cursor.restore(0)
        root: Dict[str, Any] = {}

        while True:
            line = cursor.skip_blank()
            if line is None:
                break

            if not root and self.options.flow_blocks and line.opens_flow:
                saved = cursor.mark()
                value = self._try_flow_block(cursor, line.indent)
                if value is not NO_VALUE:
                    if not cursor.table.has_content_from(cursor.position):
                        return value
                    logger.debug("Flow block at line %d is followed by more content; "
                                 "reading it as block style", line.line_no)
                    cursor.restore(saved)

            if line.is_sequence_item:
                if not root:
                    return self._parse_root_sequence(cursor, line.indent)
                if line.indent == 0:
                    raise YamlStructureError(MIXED_ROOT_MESSAGE, line.line_no)
                logger.debug("Skipping stray sequence item at line %d", line.line_no)
                cursor.advance()
                continue

            entry = split_key_value(line.content)
            if entry is None and not root and not cursor.table.has_content_from(cursor.position + 1):
                # The whole document is one scalar line.
                cursor.advance()
                return self.interpreter.interpret(line.content, line.line_no)
            if entry is None:
                logger.debug("Skipping root line %d without a key", line.line_no)
                cursor.advance()
                continue

            cursor.advance()
            key, value_text = entry
            self._store_entry(cursor, root, key, value_text, line.indent, line.line_no)

        return root

    def _parse_root_sequence(self, cursor: Cursor, indent: int) -> List[Any]:
        sequence = self.parse_sequence(cursor, indent)

        # Trailing lines are ignored unless one of them starts a mapping.
        while True:
            rest = cursor.skip_blank()
            if rest is None:
                break
            if find_separator(rest.content) != -1:
                raise YamlStructureError(MIXED_ROOT_MESSAGE, rest.line_no)
            logger.debug("Skipping line %d after root-level sequence", rest.line_no)
            cursor.advance()

        return sequence
