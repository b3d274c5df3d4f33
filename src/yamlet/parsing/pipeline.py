#!/usr/bin/env python3
"""
YAMLET PARSE PIPELINE
---------------------
Central coordinator: raw text goes through the lexer, the resulting
LineTable is walked by the structurer, and the outcome is recorded in a
ParseContext.

`parse_yaml` and `parse_yaml_stream` are the public entry points.

Author: Yamlet Team
Date: 2026-10-19
"""

import io
from typing import IO, Any, Optional, Union

from yamlet.core.config import DEFAULT_OPTIONS, ParserOptions
from yamlet.core.errors import YamlStructureError
from yamlet.core.models import Cursor
from yamlet.parsing.context import ParseContext
from yamlet.parsing.lexer import YamlLexer
from yamlet.parsing.structurer import YamlStructurer


class ParsePipeline:
    """
    The Orchestrator: ensures preprocessing and structural parsing happen
    in a strictly defined order. Every run gets a fresh cursor, so one
    pipeline may be reused for any number of documents.
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or DEFAULT_OPTIONS
        self.lexer = YamlLexer(self.options)
        self.structurer = YamlStructurer(self.options)

    def _build(self, raw_text: str, lines) -> ParseContext:
        context = ParseContext(raw_text=raw_text, options=self.options, lines=lines)
        cursor = Cursor(lines)
        try:
            context.root = self.structurer.parse_document(cursor)
        except RecursionError:
            line = cursor.peek()
            line_no = line.line_no if line is not None else len(lines)
            raise YamlStructureError("Document nesting is too deep to parse", line_no) from None
        return context

    def run(self, input_text: str) -> ParseContext:
        return self._build(input_text, self.lexer.preprocess(input_text))

    def run_stream(self, stream: Union[IO[str], IO[bytes]]) -> ParseContext:
        return self.run(self.lexer.read_stream(stream))


def parse_yaml_stream(stream: Union[IO[str], IO[bytes]],
                      options: Optional[ParserOptions] = None) -> Any:
    """
    Parses an already-open text stream and returns the root value.

    Raises:
        YamlStructureError: on a structural failure, with the nearest line number.
    """
    return ParsePipeline(options).run_stream(stream).root


def parse_yaml(text: str, options: Optional[ParserOptions] = None) -> Any:
    """Parses a YAML string. Thin wrapper around parse_yaml_stream."""
    return parse_yaml_stream(io.StringIO(text), options)
