from __future__ import annotations

import pytest

from app.ai.errors import LenientJSONError
from app.ai.lenient_json import (
    coerce_lenient_json,
    extract_object_span,
    quote_bare_word_values,
    quote_unquoted_keys,
    strip_code_fences,
)


def test_coerce_lenient_json_repairs_fenced_near_json_question_set() -> None:
    raw = '```json\n{questions:[{question:"x", options:{A:foo,B:bar,C:baz,D:qux}, correct_option:A}]}```'

    payload = coerce_lenient_json(raw)

    assert payload == {
        "questions": [
            {
                "question": "x",
                "options": {"A": "foo", "B": "bar", "C": "baz", "D": "qux"},
                "correct_option": "A",
            }
        ]
    }


def test_strip_code_fences_removes_language_tag_and_closing_fence() -> None:
    assert strip_code_fences('```JSON\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}```') == '{"a": 1}'


def test_quote_unquoted_keys_leaves_quoted_keys_untouched() -> None:
    assert quote_unquoted_keys('{a: 1, "b": 2}') == '{"a": 1, "b": 2}'


def test_quote_bare_word_values_keeps_json_literals() -> None:
    repaired = quote_bare_word_values('{"a": yes, "b": true, "c": null, "d": false}')

    assert repaired == '{"a":"yes", "b":true, "c":null, "d":false}'


def test_quote_bare_word_values_leaves_numbers_alone() -> None:
    assert quote_bare_word_values('{"count": 10}') == '{"count": 10}'


def test_extract_object_span_drops_surrounding_prose() -> None:
    text = 'Sure! Here are your questions: {"questions": []} Good luck.'

    assert extract_object_span(text) == '{"questions": []}'


def test_coerce_lenient_json_accepts_valid_json_unchanged() -> None:
    payload = coerce_lenient_json('{"questions": [{"question": "Capital of France?", "correct_option": "B"}]}')

    assert payload["questions"][0]["question"] == "Capital of France?"
    assert payload["questions"][0]["correct_option"] == "B"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "no json here at all",
        "```json\n[1, 2, 3]\n```",
        '{"questions": [1, 2,, 3]}',
    ],
)
def test_coerce_lenient_json_rejects_unrepairable_text(raw: str) -> None:
    with pytest.raises(LenientJSONError):
        coerce_lenient_json(raw)
