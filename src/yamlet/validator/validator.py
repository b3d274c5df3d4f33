#!/usr/bin/env python3
"""
YAMLET VALIDATOR - The Judge
----------------------------
Cross-checks a parse against ruamel.yaml's safe loader. Useful on
documents that stay inside the supported subset, where both parsers
must agree value for value.

Author: Yamlet Team
Date: 2026-10-19
"""

import logging
import math
from typing import Any, Tuple

from ruamel.yaml import YAML, YAMLError

# Standardized logging for audit trails
logger = logging.getLogger("yamlet.validator")


class YamlValidator:
    """
    Compares yamlet output with a reference load of the same text and
    reports the first path where they disagree.
    """

    def __init__(self):
        self.yaml = YAML(typ='safe', pure=True)

    def reference_load(self, text: str) -> Tuple[bool, Any]:
        """Loads `text` with ruamel.yaml; on failure returns a STRUCTURE_ERROR string."""
        try:
            return True, self.yaml.load(text)
        except YAMLError as e:
            mark = getattr(e, 'problem_mark', None) or getattr(e, 'context_mark', None)
            if mark:
                return False, f"STRUCTURE_ERROR:L{mark.line + 1}:C{mark.column + 1}:{e}"
            return False, f"STRUCTURE_ERROR:{e}"

    def cross_check(self, text: str, value: Any) -> Tuple[bool, str]:
        """
        The primary integrity check. Returns (agrees, message).
        """
        loaded, reference = self.reference_load(text)
        if not loaded:
            logger.info("Reference loader rejected document: %s", reference)
            return False, f"Reference loader rejected the document: {reference}"

        return self._deep_compare(reference, value, path="$")

    def _deep_compare(self, expected: Any, actual: Any, path: str) -> Tuple[bool, str]:
        """Recursive structural comparison; NaN equals NaN, bool never equals int."""
        if isinstance(expected, dict):
            if not isinstance(actual, dict):
                return False, f"Mismatch at {path}: expected a mapping, got {type(actual).__name__}"
            if list(expected.keys()) != list(actual.keys()):
                return False, (f"Mismatch at {path}: keys {list(actual.keys())} "
                               f"differ from {list(expected.keys())}")
            for key in expected:
                ok, msg = self._deep_compare(expected[key], actual[key], f"{path}.{key}")
                if not ok:
                    return False, msg
            return True, "Documents agree."

        if isinstance(expected, list):
            if not isinstance(actual, list):
                return False, f"Mismatch at {path}: expected a sequence, got {type(actual).__name__}"
            if len(expected) != len(actual):
                return False, f"Mismatch at {path}: {len(actual)} items instead of {len(expected)}"
            for i, (exp_item, act_item) in enumerate(zip(expected, actual)):
                ok, msg = self._deep_compare(exp_item, act_item, f"{path}[{i}]")
                if not ok:
                    return False, msg
            return True, "Documents agree."

        if isinstance(expected, bool) or isinstance(actual, bool):
            if expected is actual:
                return True, "Documents agree."
            return False, f"Mismatch at {path}: {actual!r} != {expected!r}"

        if isinstance(expected, float) and isinstance(actual, float):
            if math.isnan(expected) and math.isnan(actual):
                return True, "Documents agree."

        if expected != actual:
            return False, f"Mismatch at {path}: {actual!r} != {expected!r}"
        return True, "Documents agree."
