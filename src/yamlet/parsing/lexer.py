#!/usr/bin/env python3
"""
YAMLET LEXER - Line Preprocessor
--------------------------------
Turns raw text into the immutable LineTable consumed by the structurer.
Comments and trailing whitespace are removed; leading whitespace (the
indentation) and blank lines are preserved so line numbers stay stable
for diagnostics.

Author: Yamlet Team
Date: 2026-10-19
"""

from typing import IO, List, Union

from yamlet.core.config import DEFAULT_OPTIONS, TAB_WIDTH, ParserOptions
from yamlet.core.models import Line, LineTable

# Characters after which a quote opens a quoted scalar.
_QUOTE_OPENERS = ' \t:[{,'


def indent_of(line: str) -> int:
    """Leading whitespace width: a space counts 1, a tab counts TAB_WIDTH."""
    indent = 0
    for char in line:
        if char == ' ':
            indent += 1
        elif char == '\t':
            indent += TAB_WIDTH
        else:
            break
    return indent


class YamlLexer:
    """
    Orchestrates the transition from raw text to preprocessed Lines.
    Never fails: empty input yields an empty table.
    """

    def __init__(self, options: ParserOptions = DEFAULT_OPTIONS):
        self.options = options

    def _clean_artifacts(self, text: str) -> str:
        """
        Removes invisible UTF-8 BOM markers and standardizes line endings.
        """
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n').replace('\r', '\n')

    def _find_comment_split(self, text: str) -> int:
        """Index of the first '#' outside a quoted scalar, or -1."""
        quote = None
        escaped = False
        for i, char in enumerate(text):
            if quote:
                if escaped:
                    escaped = False
                elif char == '\\':
                    escaped = True
                elif char == quote:
                    quote = None
                continue
            if char in ('"', "'"):
                if i == 0 or text[i - 1] in _QUOTE_OPENERS:
                    quote = char
                continue
            if char == '#':
                return i
        return -1

    def strip_line(self, line: str) -> str:
        """Drops the comment part and trailing whitespace of one physical line."""
        if self.options.comment_mode == "naive":
            split_idx = line.find('#')
        else:
            split_idx = self._find_comment_split(line)
        if split_idx != -1:
            line = line[:split_idx]
        return line.rstrip()

    def preprocess(self, raw_text: str) -> LineTable:
        """
        Decomposes raw text into a LineTable.
        This is the primary interface for the ParsePipeline.
        """
        clean_text = self._clean_artifacts(raw_text)
        lines: List[Line] = []

        for i, physical in enumerate(clean_text.split('\n'), 1):
            text = self.strip_line(physical)
            lines.append(Line(
                line_no=i,
                text=text,
                indent=indent_of(text),
                content=text.lstrip(' \t'),
            ))

        # A trailing newline terminates the last line; it does not open a new one.
        if lines and clean_text.endswith('\n'):
            lines.pop()
        if len(lines) == 1 and not clean_text:
            lines.clear()

        return LineTable(lines)

    @staticmethod
    def read_stream(stream: Union[IO[str], IO[bytes]]) -> str:
        """Reads an already-open text (or UTF-8 byte) stream to the end."""
        data = stream.read()
        if isinstance(data, bytes):
            data = data.decode('utf-8-sig')
        return data

    def preprocess_stream(self, stream: Union[IO[str], IO[bytes]]) -> LineTable:
        return self.preprocess(self.read_stream(stream))
