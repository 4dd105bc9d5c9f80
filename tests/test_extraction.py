"""Tests for JSON extraction from model output."""

import pytest

from chef_ai.domain.errors import ExtractionError
from chef_ai.services.extraction import extract_json_object


@pytest.mark.parametrize(
    "raw",
    [
        '{"ingredients": ["egg"]}',
        'Sure! {"ingredients": ["egg"]}',
        '{"ingredients": ["egg"]} Let me know if you need more.',
        'Here you go:\n```json\n{"ingredients": ["egg"]}\n```\nEnjoy!',
        '  \n{"ingredients": ["egg"]}\n',
    ],
)
def test_extracts_single_object_surrounded_by_prose(raw: str) -> None:
    assert extract_json_object(raw) == '{"ingredients": ["egg"]}'


def test_keeps_nested_objects_intact() -> None:
    obj = '{"recipes": [{"name": "Toast", "macros": {"fat": "2g"}}]}'

    assert extract_json_object(f"Result: {obj} (3 kcal)") == obj


def test_ignores_braces_inside_string_literals() -> None:
    obj = '{"steps": ["Mix {gently}", "Serve }"]}'

    assert extract_json_object(f"Note: {obj}") == obj


def test_returns_first_of_several_objects() -> None:
    raw = 'First {"ingredients": ["egg"]} then {"ingredients": ["milk"]}'

    assert extract_json_object(raw) == '{"ingredients": ["egg"]}'


def test_skips_brace_prose_before_the_object() -> None:
    raw = 'Use {your judgement}. {"ingredients": ["egg"]}'

    assert extract_json_object(raw) == '{"ingredients": ["egg"]}'


def test_ignores_json_arrays_before_the_object() -> None:
    raw = '["not", "an", "object"] {"ingredients": []}'

    assert extract_json_object(raw) == '{"ingredients": []}'


def test_falls_back_to_outermost_braces_when_nothing_parses() -> None:
    raw = "Almost: {ingredients: [egg, milk]} done"

    assert extract_json_object(raw) == "{ingredients: [egg, milk]}"


@pytest.mark.parametrize(
    "raw",
    [
        "I cannot help with that.",
        "",
        "only an opening { brace",
        "only a closing } brace",
        "} reversed {",
    ],
)
def test_raises_when_no_object_present(raw: str) -> None:
    with pytest.raises(ExtractionError, match="Could not parse JSON"):
        extract_json_object(raw)
