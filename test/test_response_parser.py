import json
import time

import pytest

from llm.errors import ParseError
from llm.response_parser import extract_json_object, parse_analysis
from taskmaster.models import Priority


def test_plain_json():
    out = parse_analysis(
        '{"priority":"high","estimatedTimeMinutes":45,"tips":["a","b"],"subtasks":["x"]}'
    )
    assert out.priority is Priority.HIGH
    assert out.estimated_time_minutes == 45
    assert out.tips == ("a", "b")
    assert out.subtasks == ("x",)


def test_llm_extra_text_around_json():
    out = parse_analysis(
        'Sure! Here is the result: {"priority":"urgent","estimatedTimeMinutes":20} Thanks.'
    )
    assert out.priority is Priority.URGENT
    assert out.estimated_time_minutes == 20


def test_markdown_fence():
    text = '```json\n{"priority": "low", "tips": ["Use {braces} in text"]}\n```'
    out = parse_analysis(text)
    assert out.priority is Priority.LOW
    assert out.tips == ("Use {braces} in text",)


def test_nested_object_is_balanced():
    data = extract_json_object('note: {"priority": "high", "meta": {"a": {"b": 1}}} end')
    assert data["meta"] == {"a": {"b": 1}}


def test_escaped_quote_inside_string():
    data = extract_json_object('x {"tips": ["say \\"hi }\\""]} y')
    assert data["tips"] == ['say "hi }"']


@pytest.mark.parametrize("text", ["I cannot help with that.", "", "   ", "{not json}", "[1, 2]", "42"])
def test_no_object_raises(text):
    with pytest.raises(ParseError):
        parse_analysis(text)


@pytest.mark.parametrize("raw, expected", [("urgent", Priority.URGENT), ("HIGH", Priority.HIGH),
                                           (" low ", Priority.LOW), ("alta", Priority.HIGH),
                                           ("whenever", Priority.MEDIUM), (5, Priority.MEDIUM),
                                           (None, Priority.MEDIUM)])
def test_priority_coercion(raw, expected):
    out = parse_analysis(json.dumps({"priority": raw}))
    assert out.priority is expected


@pytest.mark.parametrize("raw, expected", [("99999", 480), ("-5", 5), ("0", 5), ("30", 30),
                                           ('"45"', 45), ("12.6", 13), ('"soon"', 60),
                                           ("true", 60), ("null", 60)])
def test_time_clamped_and_defaulted(raw, expected):
    out = parse_analysis('{"estimatedTimeMinutes": %s}' % raw)
    assert out.estimated_time_minutes == expected


def test_alternate_time_keys():
    assert parse_analysis('{"estimatedTime": 25}').estimated_time_minutes == 25
    assert parse_analysis('{"estimated_time_minutes": 35}').estimated_time_minutes == 35


def test_missing_fields_default():
    out = parse_analysis("{}")
    assert out.priority is Priority.MEDIUM
    assert out.estimated_time_minutes == 60
    assert out.tips == ()
    assert out.subtasks == ()


def test_lists_truncated():
    out = parse_analysis(
        '{"tips": ["1","2","3","4","5"], "subtasks": ["a","b","c","d","e","f","g"]}'
    )
    assert out.tips == ("1", "2", "3")
    assert out.subtasks == ("a", "b", "c", "d", "e")


def test_non_list_and_junk_items():
    out = parse_analysis(
        '{"tips": "just one tip", "subtasks": [{"title": "Draft"}, 3, "", "  Send  ", null]}'
    )
    assert out.tips == ()
    assert out.subtasks == ("Draft", "Send")


@pytest.mark.parametrize("text", ["{" * 50000, "{ " * 30000 + '"open string', "x {" * 20000])
def test_unbalanced_input_fails_fast(text):
    started = time.monotonic()
    with pytest.raises(ParseError):
        extract_json_object(text)
    assert time.monotonic() - started < 1.0


def test_object_inside_unclosed_braces_is_found():
    data = extract_json_object("{" * 10000 + ' {"priority": "high"} trailing')
    assert data == {"priority": "high"}


def test_first_of_two_objects_wins():
    data = extract_json_object('first {"a": 1} then {"b": 2}')
    assert data == {"a": 1}


def test_stray_quote_in_prose_before_object():
    data = extract_json_object('He said "ok, here: {"priority": "low"}')
    assert data == {"priority": "low"}
