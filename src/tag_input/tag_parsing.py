from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import reduce
from types import MappingProxyType

from tag_input.domain.models import DuplicateHandling, ParseResult, TagValue
from tag_input.registry import DEFAULT_SEPARATOR, TagOption, TagRegistry, build_registry, coerce_mode


@dataclass(frozen=True)
class TagMatch:
    name: str
    value: str
    mode: DuplicateHandling
    separator: str


@dataclass(frozen=True)
class _ParseState:
    tags: Mapping[str, TagValue] = field(default_factory=lambda: MappingProxyType({}))
    detected_order: tuple[str, ...] = ()
    default_tokens: tuple[str, ...] = ()


def parse_input_text(
    raw_text: str,
    registry: TagRegistry | Iterable[TagOption] = (),
    default_mode: DuplicateHandling | str = DuplicateHandling.overwrite,
    default_separator: str = DEFAULT_SEPARATOR,
) -> ParseResult:
    """Split ``raw_text`` into default text and ``name:value`` tags.

    With an empty registry any ``word:value`` token is a tag; otherwise only
    tokens starting with a registered ``name:`` prefix are. Repeated tags are
    merged with the governing descriptor's duplicate handling.
    """
    mode = coerce_mode(default_mode)
    resolved = build_registry(registry, default_mode=mode, default_separator=default_separator)

    def step(state: _ParseState, word: str) -> _ParseState:
        match = classify_word(word, resolved, default_mode=mode, default_separator=default_separator)
        if match is None:
            return _ParseState(
                tags=state.tags,
                detected_order=state.detected_order,
                default_tokens=(*state.default_tokens, word),
            )
        merged = accumulate_tag_value(state.tags.get(match.name), match.value, match.mode, match.separator)
        detected = state.detected_order
        if match.name not in detected:
            detected = (*detected, match.name)
        return _ParseState(
            tags=MappingProxyType({**state.tags, match.name: merged}),
            detected_order=detected,
            default_tokens=state.default_tokens,
        )

    final = reduce(step, tokenize(raw_text), _ParseState())
    return assemble_result(final.default_tokens, final.tags, final.detected_order)


def tokenize(raw_text: str) -> list[str]:
    # Single-space split: runs of spaces yield empty tokens so rejoining keeps the spacing.
    return raw_text.split(" ")


def classify_word(
    word: str,
    registry: TagRegistry,
    *,
    default_mode: DuplicateHandling = DuplicateHandling.overwrite,
    default_separator: str = DEFAULT_SEPARATOR,
) -> TagMatch | None:
    if not registry:
        colon_index = word.find(":")
        if colon_index <= 0:
            return None
        return TagMatch(
            name=word[:colon_index],
            value=word[colon_index + 1 :],
            mode=default_mode,
            separator=default_separator,
        )

    descriptor = registry.match(word)
    if descriptor is None:
        return None
    return TagMatch(
        name=descriptor.name,
        value=word[len(descriptor.name) + 1 :],
        mode=descriptor.mode,
        separator=descriptor.separator if descriptor.separator is not None else default_separator,
    )


def accumulate_tag_value(
    current: TagValue | None,
    value: str,
    mode: DuplicateHandling,
    separator: str = DEFAULT_SEPARATOR,
) -> TagValue:
    """Merge a newly seen ``value`` into the accumulated value for one tag.

    ARRAY keeps a bare string for the first occurrence and promotes to a list
    on the second; consumers rely on that shape.
    """
    if current is None or mode == DuplicateHandling.overwrite:
        return value
    if mode == DuplicateHandling.array:
        if isinstance(current, str):
            return [current, value]
        return [*current, value]
    if mode == DuplicateHandling.join:
        flat = current if isinstance(current, str) else separator.join(current)
        return flat + separator + value
    raise ValueError(f"Unknown duplicate handling mode: {mode!r}")


def assemble_result(
    default_tokens: Sequence[str],
    tags: Mapping[str, TagValue],
    detected_order: Sequence[str],
) -> ParseResult:
    return ParseResult(
        default_text=" ".join(default_tokens),
        tags={name: list(value) if isinstance(value, list) else value for name, value in tags.items()},
        detected_order=list(dict.fromkeys(detected_order)),
    )
