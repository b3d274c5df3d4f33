#!/usr/bin/env python3
"""
YAMLET SCALAR INTERPRETER
-------------------------
Classifies a trimmed token and converts it into a value of the JSON data
model. Precedence: flow literal, quoted string, reserved words, special
floats, numeric literals, plain string.

Only a malformed inline flow literal is fatal. Anything else that fails
to convert silently degrades to the original token as a string.

Author: Yamlet Team
Date: 2026-10-19
"""

import math
import re
from typing import Any, Optional

from yamlet.core.errors import FlowSyntaxError
from yamlet.parsing.scanner import FlowLiteralParser

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

RESERVED_WORDS = {
    'null': None, 'Null': None, 'NULL': None, '~': None,
    'true': True, 'True': True, 'TRUE': True,
    'false': False, 'False': False, 'FALSE': False,
}

SPECIAL_FLOATS = {
    '.inf': math.inf, '.Inf': math.inf, '.INF': math.inf,
    '+.inf': math.inf, '+.Inf': math.inf, '+.INF': math.inf,
    '-.inf': -math.inf, '-.Inf': -math.inf, '-.INF': -math.inf,
    '.nan': math.nan, '.NaN': math.nan, '.NAN': math.nan,
}

ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '\\': '\\', '"': '"', "'": "'"}

# Prefix -> (base, digit pattern). The prefix is always stripped before conversion.
BASE_PREFIXES = {
    'x': (16, re.compile(r'[0-9a-fA-F]+')),
    'o': (8, re.compile(r'[0-7]+')),
    'b': (2, re.compile(r'[01]+')),
}

INT_PATTERN = re.compile(r'[+-]?[0-9]+')
FLOAT_PATTERN = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


def is_flow_array(token: str) -> bool:
    return len(token) >= 2 and token[0] == '[' and token[-1] == ']'


def is_flow_object(token: str) -> bool:
    return len(token) >= 2 and token[0] == '{' and token[-1] == '}'


def unescape(body: str) -> str:
    """Resolves backslash escapes; unknown escapes yield the escaped character."""
    out = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == '\\' and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(char)
        i += 1
    return ''.join(out)


class ScalarInterpreter:
    """
    Stateless converter from scalar tokens to values.
    """

    def __init__(self, flow_parser: Optional[FlowLiteralParser] = None):
        self.flow_parser = flow_parser or FlowLiteralParser()

    def interpret(self, token: str, line_no: Optional[int] = None) -> Any:
        """
        Converts `token` (surrounding whitespace is ignored).

        Raises FlowSyntaxError when the token is bracketed like a flow
        literal but is not valid flow syntax.
        """
        val = token.strip(' \t')

        if is_flow_array(val) or is_flow_object(val):
            outcome = self.flow_parser.parse(val)
            if not outcome.ok:
                raise FlowSyntaxError(val, outcome.reason, line_no)
            return outcome.value

        if len(val) >= 2 and val[0] in ('"', "'") and val[-1] == val[0]:
            return unescape(val[1:-1])

        if val in RESERVED_WORDS:
            return RESERVED_WORDS[val]

        if val in SPECIAL_FLOATS:
            return SPECIAL_FLOATS[val]

        number = self._parse_number(val)
        if number is not None:
            return number

        return val

    def _parse_number(self, val: str) -> Optional[Any]:
        """Returns an int or float, or None when `val` is not a valid number."""
        if len(val) > 2 and val[0] == '0' and val[1].lower() in BASE_PREFIXES:
            base, digits = BASE_PREFIXES[val[1].lower()]
            if not digits.fullmatch(val[2:]):
                return None
            return self._bounded(int(val[2:], base))

        if '.' in val or 'e' in val or 'E' in val:
            if not FLOAT_PATTERN.fullmatch(val):
                return None
            result = float(val)
            # Out-of-range literals overflow to infinity instead of converting.
            return None if math.isinf(result) else result

        if INT_PATTERN.fullmatch(val):
            return self._bounded(int(val))

        return None

    @staticmethod
    def _bounded(number: int) -> Optional[int]:
        if INT64_MIN <= number <= INT64_MAX:
            return number
        return None
