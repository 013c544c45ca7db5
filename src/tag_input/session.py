from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from tag_input.domain.models import DuplicateHandling, ParseResult, TagName, TagValue
from tag_input.registry import DEFAULT_SEPARATOR, TagOption, TagRegistry, build_registry, coerce_mode
from tag_input.tag_parsing import parse_input_text

ChangeCallback = Callable[[ParseResult, str, list[str]], None]

_TAG_NAME: TypeAdapter[str] = TypeAdapter(TagName)


@dataclass(frozen=True)
class TagBadge:
    name: str
    value: str
    icon: str | None = None
    color: str | None = None


class TagInputSession:
    """Headless state for a single-line tag input.

    Holds the raw text, reparses it on every change and notifies ``on_change``
    only when the default text or the tags (in order) differ from the previous
    result. Rendering is left to the caller.
    """

    def __init__(
        self,
        registry: TagRegistry | Iterable[TagOption] = (),
        *,
        default_mode: DuplicateHandling | str = DuplicateHandling.overwrite,
        default_separator: str = DEFAULT_SEPARATOR,
        text: str = "",
        on_change: ChangeCallback | None = None,
    ) -> None:
        self.default_mode = coerce_mode(default_mode)
        self.default_separator = default_separator
        self.registry = build_registry(
            registry,
            default_mode=self.default_mode,
            default_separator=default_separator,
        )
        self.on_change = on_change
        self._text = ""
        self._result = ParseResult()
        self._detected_tags: list[str] = []
        if text:
            self.set_text(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def result(self) -> ParseResult:
        return self._result

    @property
    def detected_tags(self) -> list[str]:
        return list(self._detected_tags)

    def set_text(self, text: str) -> bool:
        self._text = text
        parsed = parse_input_text(text, self.registry, self.default_mode, self.default_separator)
        self._detected_tags = list(parsed.detected_order)
        previous, self._result = self._result, parsed

        # Tag order counts as a change; badges render in map order.
        if _snapshot(parsed) == _snapshot(previous):
            return False

        logger.debug(f"Tag input changed: {len(parsed.tags)} tag(s), default={parsed.default_text!r}")
        if self.on_change is not None:
            self.on_change(parsed, text, self.detected_tags)
        return True

    def toggle_tag(self, name: str) -> str:
        """Append ``name:`` to the text, or strip it if the text already ends with it."""
        try:
            _TAG_NAME.validate_python(name)
        except ValidationError as exc:
            raise ValueError(f"Invalid tag name: {name!r}") from exc

        marker = f"{name}:"
        if self._text.endswith(marker):
            new_text = self._text[: -len(marker)]
        else:
            space_prefix = " " if self._text and not self._text.endswith(" ") else ""
            new_text = f"{self._text}{space_prefix}{marker}"
        self.set_text(new_text)
        return new_text

    def display_value(self, name: str) -> str:
        value = self._result.tags.get(name)
        if value is None:
            return ""
        if isinstance(value, list):
            return ", ".join(value)
        return value

    def badges(self) -> list[TagBadge]:
        out: list[TagBadge] = []
        for name in self._result.tags:
            descriptor = self.registry.get(name)
            out.append(
                TagBadge(
                    name=name,
                    value=self.display_value(name),
                    icon=descriptor.icon if descriptor is not None else None,
                    color=descriptor.color if descriptor is not None else None,
                ),
            )
        return out


def _snapshot(result: ParseResult) -> tuple[str, list[tuple[str, TagValue]]]:
    return result.default_text, list(result.tags.items())
