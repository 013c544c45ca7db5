from __future__ import annotations

import pytest
from pydantic import ValidationError

from tag_input.domain import DuplicateHandling, ParseResult, TagDescriptor


def test_tag_descriptor_defaults() -> None:
    descriptor = TagDescriptor(name="email")
    assert descriptor.mode == DuplicateHandling.overwrite
    assert descriptor.separator is None
    assert descriptor.icon is None


def test_tag_descriptor_is_frozen() -> None:
    descriptor = TagDescriptor(name="email")
    with pytest.raises(ValidationError):
        descriptor.name = "other"


@pytest.mark.parametrize("name", ["", "a:b", "a b", "a\tb"])
def test_tag_descriptor_rejects_invalid_names(name: str) -> None:
    with pytest.raises(ValidationError):
        TagDescriptor(name=name)


def test_tag_descriptor_rejects_unknown_mode() -> None:
    with pytest.raises(ValidationError):
        TagDescriptor(name="x", mode="sometimes")


def test_parse_result_defaults_are_independent() -> None:
    first = ParseResult()
    second = ParseResult()
    first.tags["a"] = "1"
    assert second.tags == {}


def test_parse_result_json_round_trip() -> None:
    result = ParseResult(default_text="hi", tags={"t": ["a", "b"], "n": "x"}, detected_order=["t", "n"])
    assert ParseResult.from_json(result.to_json()) == result
