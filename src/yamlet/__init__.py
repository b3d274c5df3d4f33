r"""
Yamlet - indentation-driven parser for a practical YAML subset.

    >>> from yamlet import parse_yaml
    >>> parse_yaml("key:\n  - a\n  - b\n")
    {'key': ['a', 'b']}
"""

__version__ = "1.0.0"

from yamlet.core.config import ParserOptions
from yamlet.core.errors import FlowSyntaxError, YamletError, YamlStructureError
from yamlet.parsing.pipeline import ParsePipeline, parse_yaml, parse_yaml_stream

__all__ = [
    "FlowSyntaxError",
    "ParsePipeline",
    "ParserOptions",
    "YamletError",
    "YamlStructureError",
    "parse_yaml",
    "parse_yaml_stream",
]
