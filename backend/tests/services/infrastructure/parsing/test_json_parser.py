from creal.services.infrastructure.parsing import (
    extract_largest_balanced_json,
    parse_json_object,
    strip_markdown_fences,
)


def test_strip_markdown_fences():
    assert strip_markdown_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_markdown_fences('  {"a": 1}  ') == '{"a": 1}'
    assert strip_markdown_fences(None) == ""


def test_extract_largest_balanced_json_ignores_braces_in_strings():
    text = 'prefix {"a": "}{"} middle {"b": {"c": [1, 2, 3]}, "d": "long enough"} suffix'
    assert extract_largest_balanced_json(text) == '{"b": {"c": [1, 2, 3]}, "d": "long enough"}'


def test_extract_largest_balanced_json_none():
    assert extract_largest_balanced_json("") is None
    assert extract_largest_balanced_json("[1, 2]") is None


def test_parse_json_object_plain_and_fenced():
    assert parse_json_object('{"a": 1}') == {"a": 1}
    assert parse_json_object('```\n{"a": 1}\n```') == {"a": 1}


def test_parse_json_object_from_prose():
    assert parse_json_object('Sure! {"score": 5} Let me know.') == {"score": 5}


def test_parse_json_object_rejects_non_objects():
    assert parse_json_object("[1, 2, 3]") is None
    assert parse_json_object("no json here") is None
    assert parse_json_object("") is None
