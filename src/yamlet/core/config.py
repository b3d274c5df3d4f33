#!/usr/bin/env python3
"""
YAMLET PARSER OPTIONS
---------------------
Runtime knobs for a parse. Populated directly by library callers or from
CLI flags by `yamlet.cli.main`.

Author: Yamlet Team
Date: 2026-10-19
"""

from dataclasses import dataclass

# Column width of a tab character when measuring indentation.
TAB_WIDTH = 2

COMMENT_MODES = ("quoted", "naive")


@dataclass(frozen=True)
class ParserOptions:
    """
    comment_mode:
        "quoted" strips at the first '#' outside a quoted scalar.
        "naive" strips at the first '#' anywhere on the line.
    flow_blocks:
        Enables collection of `[...]` / `{...}` blocks spanning several lines.
    """
    comment_mode: str = "quoted"
    flow_blocks: bool = True

    def __post_init__(self):
        if self.comment_mode not in COMMENT_MODES:
            raise ValueError(
                f"Unknown comment_mode '{self.comment_mode}', expected one of {COMMENT_MODES}"
            )


DEFAULT_OPTIONS = ParserOptions()
