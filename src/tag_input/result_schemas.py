from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tag_input.domain.models import ParseResult, TagDescriptor

__all__ = [
    "parse_result_json_schema",
    "tag_descriptor_json_schema",
    "validate_parse_result_payload",
    "validate_tag_descriptor_payload",
    "parse_result_json",
]


def parse_result_json_schema() -> dict[str, Any]:
    """JSON schema for parse output emitted by ``tag-input parse --json``."""
    return ParseResult.model_json_schema()


def tag_descriptor_json_schema() -> dict[str, Any]:
    """JSON schema for one entry of the ``tag_input.tags`` config list."""
    return TagDescriptor.model_json_schema()


def validate_parse_result_payload(payload: Mapping[str, Any]) -> ParseResult:
    return ParseResult.model_validate(payload)


def validate_tag_descriptor_payload(payload: Mapping[str, Any]) -> TagDescriptor:
    return TagDescriptor.model_validate(payload)


def parse_result_json(raw: str | bytes | bytearray) -> ParseResult:
    return ParseResult.model_validate_json(raw)
