#!/usr/bin/env python3
"""
YAMLET ERRORS
-------------
Exception hierarchy raised by the parser. Only structural problems are
raised; soft degradations (numbers that do not convert, multi-line flow
blocks that fail strict parsing) never surface as exceptions.

Author: Yamlet Team
Date: 2026-10-19
"""

from typing import Optional


class YamletError(ValueError):
    """Base class for every failure raised by yamlet."""


class YamlStructureError(YamletError):
    """
    Hard failure that aborts the whole parse.

    Carries the 1-based line number nearest to the failure so callers can
    point users at the offending line.
    """

    def __init__(self, message: str, line_no: Optional[int] = None):
        self.message = message
        self.line_no = line_no
        if line_no is not None:
            message = f"{message} at line {line_no}"
        super().__init__(message)


class FlowSyntaxError(YamlStructureError):
    """An inline `[...]` / `{...}` literal failed the strict flow grammar."""

    def __init__(self, text: str, reason: str, line_no: Optional[int] = None):
        self.text = text
        self.reason = reason
        kind = "array" if text.lstrip().startswith('[') else "object"
        super().__init__(f"Invalid flow {kind} syntax: {text} ({reason})", line_no)
