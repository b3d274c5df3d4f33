import io
import math
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from yamlet import (
    FlowSyntaxError,
    ParsePipeline,
    ParserOptions,
    YamlStructureError,
    parse_yaml,
    parse_yaml_stream,
)

SAMPLE_DOCUMENT = """
# Document exercising most of the supported subset
root:
  string_unquoted: hello world
  string_quoted_single: 'single quoted string'
  string_quoted_double: "double quoted string"
  integer: 42
  float: 3.14
  boolean_true: true
  boolean_false: false
  boolean_True: True
  boolean_False: False
  null_null: null
  null_tilde: ~
  nested_map:
    key1: value1
    key2: value2
    deeper_map:
      subkey: subvalue
  simple_list:
    - item1
    - item2
    - 3
    - true
    - null
  nested_list:
    - - subitem1
      - subitem2
    - - 4
      - 5.5
  map_with_list:
    list_key:
      - list_item1
      - list_item2
  list_with_maps:
    - map1:
        a: 1
        b: 2
    - map2:
        c: 3
        d: 4
  complex:
    map:
      list:
        - scalar: value
          sublist:
            - 1
            - 2
        - another: map
          with: values

top_level_list:
  - top_item1
  - top_item2
trailing_comment_key: value # trailing comment
tab_indent:
\tkey: value
json_compatibility:
  json_array: [1, 2, 3, "four", true, null]
  json_nested_array: [[1, 2], [3, 4], ["a", "b"]]
  json_object: {"key1": "value1", "key2": 42, "key3": true}
  json_nested_object: {"outer": {"inner": "value", "number": 123}}
  multi_line:
    {
      "users": [
        {"id": 1, "name": "John Doe", "roles": ["admin", "user"]},
        {"id": 2, "active": false}
      ]
    }
  empty_array: []
  empty_object: {}
"""


def test_full_document():
    """
    INTEGRATION TEST: every construct of the subset in one document.
    """
    doc = parse_yaml(SAMPLE_DOCUMENT)
    root = doc["root"]

    assert root["string_unquoted"] == "hello world"
    assert root["string_quoted_single"] == "single quoted string"
    assert root["string_quoted_double"] == "double quoted string"
    assert root["integer"] == 42
    assert root["float"] == 3.14
    assert root["boolean_true"] is True and root["boolean_True"] is True
    assert root["boolean_false"] is False and root["boolean_False"] is False
    assert root["null_null"] is None and root["null_tilde"] is None
    assert root["nested_map"] == {"key1": "value1", "key2": "value2", "deeper_map": {"subkey": "subvalue"}}
    assert root["simple_list"] == ["item1", "item2", 3, True, None]
    assert root["nested_list"] == [["subitem1", "subitem2"], [4, 5.5]]
    assert root["map_with_list"] == {"list_key": ["list_item1", "list_item2"]}
    assert root["list_with_maps"] == [{"map1": {"a": 1, "b": 2}}, {"map2": {"c": 3, "d": 4}}]
    assert root["complex"]["map"]["list"] == [
        {"scalar": "value", "sublist": [1, 2]},
        {"another": "map", "with": "values"},
    ]

    assert doc["top_level_list"] == ["top_item1", "top_item2"]
    assert doc["trailing_comment_key"] == "value"
    assert doc["tab_indent"] == {"key": "value"}

    compat = doc["json_compatibility"]
    assert compat["json_array"] == [1, 2, 3, "four", True, None]
    assert compat["json_nested_array"] == [[1, 2], [3, 4], ["a", "b"]]
    assert compat["json_object"] == {"key1": "value1", "key2": 42, "key3": True}
    assert compat["json_nested_object"] == {"outer": {"inner": "value", "number": 123}}
    assert compat["multi_line"]["users"][0]["roles"] == ["admin", "user"]
    assert compat["multi_line"]["users"][1] == {"id": 2, "active": False}
    assert compat["empty_array"] == []
    assert compat["empty_object"] == {}


def test_key_order_follows_insertion():
    assert list(parse_yaml("b: 1\na: 2\nc: 3")) == ["b", "a", "c"]


@pytest.mark.parametrize("text, expected", [
    ("true", True),
    ("false", False),
    ("null", None),
    ("~", None),
    ("42", 42),
    ("-7", -7),
    ("2.5", 2.5),
])
def test_plain_scalar_documents(text, expected):
    assert parse_yaml(text) == expected
    assert type(parse_yaml(text)) is type(expected)


def test_duplicate_keys_last_write_wins():
    assert parse_yaml("a: 1\na: 2\n") == {"a": 2}


def test_numeric_base_literals():
    assert parse_yaml("hex: 0xFF\noct: 0o777\nbin: 0b1010") == {"hex": 255, "oct": 511, "bin": 10}


def test_special_floats():
    doc = parse_yaml("pos: .inf\nneg: -.inf\nnan: .nan")
    assert doc["pos"] == math.inf
    assert doc["neg"] == -math.inf
    assert doc["nan"] != doc["nan"]


def test_mapping_with_sequence_value():
    assert parse_yaml("key:\n  - a\n  - b\n") == {"key": ["a", "b"]}


def test_explicit_nested_null_is_accepted():
    assert parse_yaml("key:\n  null\n") == {"key": None}


@pytest.mark.parametrize("text, line_no", [
    ("key:\n", 1),
    ("key:\nother: 1\n", 1),
    ("first: 1\nkey:\n\n\nsecond: 2\n", 2),
    ("outer:\n  inner:\n  sibling: 1\n", 2),
])
def test_missing_nested_block_is_fatal(text, line_no):
    with pytest.raises(YamlStructureError) as excinfo:
        parse_yaml(text)
    assert excinfo.value.line_no == line_no
    assert "Expected indented block for key" in str(excinfo.value)


def test_root_sequence():
    assert parse_yaml("- a\n- b: 1\n  c: 2\n") == ["a", {"b": 1, "c": 2}]


def test_mapping_then_sequence_at_root_is_fatal():
    with pytest.raises(YamlStructureError) as excinfo:
        parse_yaml("a: 1\n- b\n")
    assert excinfo.value.line_no == 2
    assert "Cannot mix sequences and mappings" in str(excinfo.value)


def test_sequence_then_mapping_at_root_is_fatal():
    with pytest.raises(YamlStructureError) as excinfo:
        parse_yaml("- a\nb: 1\n")
    assert excinfo.value.line_no == 2


def test_trailing_text_after_root_sequence_is_ignored():
    assert parse_yaml("- a\n  more\n") == ["a"]
    assert parse_yaml("- a\n- b\n  c\n\n  d\n") == ["a", "b"]
    assert parse_yaml("- [1,\n   2]\n") == ["[1,"]


def test_key_after_skipped_root_sequence_text_is_fatal():
    with pytest.raises(YamlStructureError) as excinfo:
        parse_yaml("- a\n  more\nb: 1\n")
    assert excinfo.value.line_no == 3
    assert "Cannot mix sequences and mappings" in str(excinfo.value)


def test_root_lines_without_key_are_skipped():
    assert parse_yaml("a: 1\njust some text\nb: 2") == {"a": 1, "b": 2}


def test_document_start_marker_is_ignored():
    assert parse_yaml("---\nname: demo\n") == {"name": "demo"}


def test_flow_document_with_quoted_brackets():
    assert parse_yaml('[\n  "a ] b",\n  "c"\n]\n') == ["a ] b", "c"]
    assert parse_yaml('{"a": "}", "b": [1]}') == {"a": "}", "b": [1]}


def test_malformed_inline_flow_literal_is_fatal():
    with pytest.raises(FlowSyntaxError) as excinfo:
        parse_yaml("ok: 1\nkey: [a, b]\n")
    assert excinfo.value.line_no == 2


def test_malformed_multi_line_flow_block_degrades():
    assert parse_yaml("key:\n  [a,\n   b]\n") == {"key": "[a,"}


def test_flow_blocks_can_be_disabled():
    text = 'key:\n  [1,\n   2]\n'
    assert parse_yaml(text) == {"key": [1, 2]}
    assert parse_yaml(text, ParserOptions(flow_blocks=False)) == {"key": "[1,"}


def test_hash_inside_quotes_depends_on_comment_mode():
    text = 'color: "#ff0000" # red\n'
    assert parse_yaml(text) == {"color": "#ff0000"}
    assert parse_yaml(text, ParserOptions(comment_mode="naive")) == {"color": '"'}


def test_urls_and_times_keep_their_colons():
    doc = parse_yaml("url: http://example.com:8080/x\nat: 12:30\nlinks:\n  - https://a.b\n")
    assert doc == {"url": "http://example.com:8080/x", "at": "12:30", "links": ["https://a.b"]}


def test_empty_document_is_an_empty_mapping():
    assert parse_yaml("") == {}
    assert parse_yaml("# only a comment\n\n") == {}


def test_stream_and_string_entry_points_agree():
    text = "name: test_user\nage: 25\nactive: true\ntags:\n  - developer\n  - yaml\n"
    assert parse_yaml_stream(io.StringIO(text)) == parse_yaml(text)
    assert parse_yaml_stream(io.BytesIO(text.encode("utf-8"))) == parse_yaml(text)


def test_pipeline_is_reusable():
    pipeline = ParsePipeline()
    first = pipeline.run("a:\n  b: 1\n")
    second = pipeline.run("- x\n")
    assert first.root == {"a": {"b": 1}}
    assert first.doc_type == "mapping"
    assert first.line_count == 2
    assert second.root == ["x"]
    assert second.doc_type == "sequence"


def nested_mapping(depth):
    lines = [f"{'  ' * i}k{i}:" for i in range(depth)]
    lines.append(f"{'  ' * depth}leaf: 1")
    return "\n".join(lines) + "\n"


def test_moderate_nesting_parses():
    value = parse_yaml(nested_mapping(50))
    for i in range(50):
        value = value[f"k{i}"]
    assert value == {"leaf": 1}


def test_excessive_nesting_is_a_structure_error():
    with pytest.raises(YamlStructureError) as excinfo:
        parse_yaml(nested_mapping(1500))
    assert "nesting is too deep" in str(excinfo.value)
    assert 1 <= excinfo.value.line_no <= 1501
