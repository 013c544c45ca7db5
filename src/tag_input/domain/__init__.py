"""Core domain models for tag-input."""

from tag_input.domain.models import (
    DuplicateHandling,
    ParseResult,
    TagDescriptor,
    TagName,
    TagValue,
)

__all__ = [
    "DuplicateHandling",
    "ParseResult",
    "TagDescriptor",
    "TagName",
    "TagValue",
]
