"""Unit tests for decoding, YAML conversion, indentation and sanitizing.

These tests avoid mocks and do not hit the network.
"""

import json
from urllib.parse import quote

import pytest
import yaml

from pdum.iam.transcode import (
    decode_document,
    indent,
    json_to_yaml,
    sanitize_identifier,
    transcode_document,
    yaml_scalar,
)
from pdum.iam.types import ConversionError, DecodeError

TRUST_POLICY = {
    "Version": "2012-10-17",
    "Statement": [
        {
            "Effect": "Allow",
            "Principal": {"Service": "lambda.amazonaws.com"},
            "Action": "sts:AssumeRole",
        }
    ],
}


def test_decode_document_reverses_percent_encoding():
    assert decode_document("%7B%22a%22%3A1%7D") == '{"a":1}'


def test_decode_document_plus_is_space():
    assert decode_document("a+b%20c") == "a b c"


def test_decode_document_plain_text_untouched():
    assert decode_document('{"a": 1}') == '{"a": 1}'


@pytest.mark.parametrize("raw", ["%", "%7", "%zz", "abc%4"])
def test_decode_document_malformed_escape_raises(raw):
    with pytest.raises(DecodeError):
        decode_document(raw)


def test_decode_document_invalid_utf8_raises():
    with pytest.raises(DecodeError):
        decode_document("%FF%FE")


def test_json_to_yaml_keeps_key_order():
    text = json_to_yaml('{"Version": "2012-10-17", "Statement": [], "Alpha": 1}')
    keys = [line.split(":")[0] for line in text.splitlines()]
    assert keys == ["Version", "Statement", "Alpha"]


def test_json_to_yaml_block_style():
    text = json_to_yaml(json.dumps(TRUST_POLICY))
    assert text == (
        "Version: '2012-10-17'\n"
        "Statement:\n"
        "- Effect: Allow\n"
        "  Principal:\n"
        "    Service: lambda.amazonaws.com\n"
        "  Action: sts:AssumeRole\n"
    )


def test_json_to_yaml_invalid_json_raises():
    with pytest.raises(ConversionError):
        json_to_yaml("mock-policy-document")


def test_conversion_and_decode_errors_are_value_errors():
    assert issubclass(DecodeError, ValueError)
    assert issubclass(ConversionError, ValueError)


@pytest.mark.parametrize(
    "document",
    [
        TRUST_POLICY,
        {"a": 1},
        {"nested": {"list": [1, "two", None, True, {"x": "y: z"}]}},
        [{"Sid": "A long sid with spaces " * 20}],
        {"Condition": {"StringEquals": {"aws:RequestedRegion": ["us-east-1", "eu-west-1"]}}},
    ],
)
def test_transcode_round_trip(document):
    raw = quote(json.dumps(document), safe="")
    assert yaml.safe_load(transcode_document(raw)) == document


@pytest.mark.parametrize("columns", [0, 1, 6, 10])
def test_indent_preserves_line_count(columns):
    text = "a: 1\n\nb:\n  - c\n"
    out = indent(text, columns)
    assert len(out.split("\n")) == len(text.split("\n"))
    for before, after in zip(text.split("\n"), out.split("\n")):
        assert after == " " * columns + before


def test_indent_zero_is_identity():
    text = "x\n  y\n\nz"
    assert indent(text, 0) == text


def test_indent_prefixes_blank_lines():
    assert indent("a\n\nb", 2) == "  a\n  \n  b"


def test_indent_keeps_crlf():
    assert indent("a\r\nb", 3) == "   a\r\n   b"


def test_indent_empty_string():
    assert indent("", 4) == "    "


def test_indent_negative_columns_raises():
    with pytest.raises(ValueError):
        indent("a", -1)


def test_sanitize_identifier_example():
    assert sanitize_identifier("test-role-name") == "testrolename"


@pytest.mark.parametrize("raw", ["", "-", "a--b-", "NoHyphens", "my_role-1"])
def test_sanitize_identifier_idempotent_and_hyphen_free(raw):
    once = sanitize_identifier(raw)
    assert "-" not in once
    assert sanitize_identifier(once) == once


def test_sanitize_identifier_collision_is_accepted():
    assert sanitize_identifier("a-bc") == sanitize_identifier("ab-c")


@pytest.mark.parametrize(
    "value",
    ["test-role-name", "/", "", "has: colon", "line\nbreak", "# not a comment", "yes", 3600],
)
def test_yaml_scalar_round_trips_inline(value):
    rendered = yaml_scalar(value)
    assert "\n" not in rendered
    assert yaml.safe_load(f"key: {rendered}") == {"key": value}


def test_yaml_scalar_plain_when_safe():
    assert yaml_scalar("test-role-name") == "test-role-name"
    assert yaml_scalar("/") == "/"


@pytest.mark.parametrize("document", ['"x"', "1", "true", "null"])
def test_json_to_yaml_rejects_top_level_scalars(document):
    with pytest.raises(ConversionError):
        json_to_yaml(document)


def test_yaml_scalar_keeps_characters_outside_bmp():
    value = "rocket \U0001F680\nline"
    rendered = yaml_scalar(value)
    assert "\\ud83d" not in rendered
    assert yaml.safe_load(f"key: {rendered}") == {"key": value}
