import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from yamlet.core.errors import FlowSyntaxError, YamlStructureError
from yamlet.core.models import NO_VALUE, Cursor
from yamlet.parsing.lexer import YamlLexer
from yamlet.parsing.structurer import YamlStructurer, find_separator, split_key_value

structurer = YamlStructurer()


def cursor_for(text: str, position: int = 0) -> Cursor:
    return Cursor(YamlLexer().preprocess(text), position)


@pytest.mark.parametrize("text, expected", [
    ("key: value", 3),
    ("key:", 3),
    ("url: http://example.com", 3),
    ("time: 12:30", 4),
    ('"a: b": c', 6),
    ("http://example.com", -1),
    ("a:b", -1),
    ("plain text", -1),
])
def test_find_separator(text, expected):
    assert find_separator(text) == expected


def test_split_key_value_trims_both_sides():
    assert split_key_value("name :   test_user") == ("name", "test_user")
    assert split_key_value("nested:") == ("nested", "")
    assert split_key_value("no separator") is None


def test_mapping_consumes_its_block_only():
    cursor = cursor_for("a: 1\nb: 2\nc:\n  d: 3\n")
    assert structurer.parse_mapping(cursor, 0) == {"a": 1, "b": 2, "c": {"d": 3}}
    assert cursor.at_end


def test_mapping_stops_at_line_without_separator():
    cursor = cursor_for("a: 1\nplain\nb: 2")
    assert structurer.parse_mapping(cursor, 0) == {"a": 1}
    assert cursor.position == 1


def test_mapping_stops_at_deeper_line():
    cursor = cursor_for("a: 1\n  b: 2")
    assert structurer.parse_mapping(cursor, 0) == {"a": 1}
    assert cursor.position == 1


def test_mapping_never_reads_past_dedent():
    cursor = cursor_for("outer:\n  a: 1\n  b: 2\nnext: 3\n  c: 4", 1)
    assert structurer.parse_mapping(cursor, 2) == {"a": 1, "b": 2}
    assert cursor.position == 3


def test_sequence_item_kinds():
    text = (
        "- plain\n"
        "- 42\n"
        "- [1, 2]\n"
        '- {"k": "v"}\n'
        "- key: value\n"
        "  other: 2\n"
        "-\n"
        "  nested: true\n"
        "- - x - y\n"
        "  - z\n"
    )
    cursor = cursor_for(text)
    assert structurer.parse_sequence(cursor, 0) == [
        "plain",
        42,
        [1, 2],
        {"k": "v"},
        {"key": "value", "other": 2},
        {"nested": True},
        ["x", "y", "z"],
    ]
    assert cursor.at_end


def test_negative_number_item_is_a_scalar():
    assert structurer.parse_sequence(cursor_for("- -5\n- -.inf"), 0) == [-5, float("-inf")]


def test_inline_mapping_ends_at_inconsistent_key_indent():
    cursor = cursor_for("- a: 1\n  b: 2\n   c: 3\n")
    assert structurer.parse_sequence(cursor, 0) == [{"a": 1, "b": 2}]
    assert cursor.position == 2


def test_inconsistent_nested_sequence_indent_is_fatal():
    cursor = cursor_for("- - a\n  - b\n    - c\n")
    with pytest.raises(YamlStructureError) as excinfo:
        structurer.parse_sequence(cursor, 0)
    assert excinfo.value.line_no == 3
    assert "Inconsistent indentation" in str(excinfo.value)


def test_sequence_item_without_block_is_fatal():
    cursor = cursor_for("-\n- b")
    with pytest.raises(YamlStructureError) as excinfo:
        structurer.parse_sequence(cursor, 0)
    assert excinfo.value.line_no == 1
    assert "sequence item" in str(excinfo.value)


def test_value_returns_sentinel_on_dedent():
    cursor = cursor_for("a: 1")
    assert structurer.parse_value(cursor, 2) is NO_VALUE
    assert cursor.position == 0


def test_value_returns_sentinel_at_end_of_input():
    assert structurer.parse_value(cursor_for("\n\n"), 0) is NO_VALUE


def test_value_distinguishes_null_from_no_value():
    value = structurer.parse_value(cursor_for("  ~"), 2)
    assert value is None
    assert value is not NO_VALUE


def test_value_skips_over_indented_lines():
    cursor = cursor_for("    deep\n  value")
    assert structurer.parse_value(cursor, 2) == "value"
    assert cursor.at_end


def test_value_prefers_flow_block():
    cursor = cursor_for('  [\n    "a",\n    "b"\n  ]\n')
    assert structurer.parse_value(cursor, 2) == ["a", "b"]
    assert cursor.at_end


def test_failed_multi_line_flow_block_falls_back_to_line_grammar():
    cursor = cursor_for("  [a,\n   b]\n")
    assert structurer.parse_value(cursor, 2) == "[a,"
    assert cursor.position == 1


def test_failed_single_line_flow_block_is_fatal():
    cursor = cursor_for("key:\n  [a, b]\n")
    with pytest.raises(FlowSyntaxError) as excinfo:
        structurer.parse_document(cursor)
    assert excinfo.value.line_no == 2
