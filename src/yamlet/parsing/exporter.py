#!/usr/bin/env python3
"""
YAMLET EXPORTER - Value Renderer
--------------------------------
Renders a parsed value tree back to text, either as JSON or as block
style YAML through ruamel.yaml.

Author: Yamlet Team
Date: 2026-10-19
"""

import io
import json
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

EXPORT_FORMATS = ("json", "yaml")


class YamlExporter:
    """
    The Reconstructor: converts parsed values into JSON or YAML strings.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.yaml = YAML(typ='rt')
        self.yaml.default_flow_style = False
        # Sequences are indented 4 (offset 2) for readability in IDEs.
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def _to_commented(self, data: Any) -> Any:
        """
        Recursively rebuilds dicts and lists as ruamel round-trip containers
        so key order is kept exactly as parsed.
        """
        if isinstance(data, dict):
            mapping = CommentedMap()
            for key, value in data.items():
                mapping[key] = self._to_commented(value)
            return mapping
        if isinstance(data, list):
            return CommentedSeq(self._to_commented(item) for item in data)
        return data

    def to_json(self, value: Any) -> str:
        # NaN and infinities are emitted as the JavaScript literals json uses.
        return json.dumps(value, indent=self.indent, ensure_ascii=False)

    def to_yaml(self, value: Any) -> str:
        stream = io.StringIO()
        self.yaml.dump(self._to_commented(value), stream)
        return stream.getvalue()

    def export(self, value: Any, fmt: str = "json") -> str:
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format '{fmt}', expected one of {EXPORT_FORMATS}")
        return self.to_yaml(value) if fmt == "yaml" else self.to_json(value)
