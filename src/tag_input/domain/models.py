from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

TagName = Annotated[str, Field(min_length=1, pattern=r"^[^\s:]+$")]
TagValue = str | list[str]


class DomainModel(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class DuplicateHandling(StrEnum):
    overwrite = "overwrite"
    array = "array"
    join = "join"


class TagDescriptor(DomainModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: TagName
    mode: DuplicateHandling = DuplicateHandling.overwrite
    separator: str | None = None
    icon: str | None = None
    color: str | None = None


class ParseResult(DomainModel):
    default_text: str = ""
    tags: dict[str, TagValue] = Field(default_factory=dict)
    detected_order: list[str] = Field(default_factory=list)

    def tag_input_value(self) -> dict[str, Any]:
        """Default text and tags keyed the way the input widget emits them."""
        return {"default": self.default_text, "tags": dict(self.tags)}

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, raw: str | bytes | bytearray) -> ParseResult:
        return cls.model_validate_json(raw)
