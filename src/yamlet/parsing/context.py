#!/usr/bin/env python3
"""
YAMLET PARSE CONTEXT
--------------------
The record of a single parse: the raw input, the options it ran with,
the LineTable produced by the lexer and the resulting value tree.

Author: Yamlet Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, Optional

from yamlet.core.config import DEFAULT_OPTIONS, ParserOptions
from yamlet.core.models import LineTable


@dataclass
class ParseContext:
    """
    Created by the ParsePipeline and filled in stage by stage.
    """
    raw_text: str                                   # The input exactly as received
    options: ParserOptions = DEFAULT_OPTIONS        # Options the parse ran with
    lines: Optional[LineTable] = None               # Lexer output
    root: Any = None                                # Final value tree

    @property
    def line_count(self) -> int:
        return len(self.lines) if self.lines is not None else 0

    @property
    def doc_type(self) -> str:
        """Kind of the root value: mapping, sequence or scalar."""
        if isinstance(self.root, dict):
            return "mapping"
        if isinstance(self.root, list):
            return "sequence"
        return "scalar"
