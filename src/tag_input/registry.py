from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from pydantic import ValidationError

from tag_input.domain.models import DuplicateHandling, TagDescriptor

DEFAULT_SEPARATOR = ","

TagOption = str | Mapping[str, Any] | TagDescriptor


class TagRegistryError(ValueError):
    pass


@dataclass(frozen=True)
class TagRegistry:
    """Ordered, normalized tag descriptors.

    Every descriptor has its mode and separator resolved at construction, so
    lookups never need to know whether an option was a bare name.
    """

    descriptors: tuple[TagDescriptor, ...] = ()
    _by_name: dict[str, TagDescriptor] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, TagDescriptor] = {}
        for descriptor in self.descriptors:
            # First occurrence governs duplicated names.
            by_name.setdefault(descriptor.name, descriptor)
        object.__setattr__(self, "_by_name", by_name)

    @classmethod
    def from_options(
        cls,
        options: Iterable[TagOption],
        *,
        default_mode: DuplicateHandling | str = DuplicateHandling.overwrite,
        default_separator: str = DEFAULT_SEPARATOR,
    ) -> TagRegistry:
        mode = coerce_mode(default_mode)
        descriptors = tuple(
            _normalize_option(option, default_mode=mode, default_separator=default_separator)
            for option in options
        )
        logger.debug(f"Built tag registry with {len(descriptors)} descriptor(s)")
        return cls(descriptors=descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    def __iter__(self) -> Iterator[TagDescriptor]:
        return iter(self.descriptors)

    def __bool__(self) -> bool:
        return bool(self.descriptors)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def get(self, name: str) -> TagDescriptor | None:
        return self._by_name.get(name)

    def match(self, word: str) -> TagDescriptor | None:
        """Return the descriptor whose ``name:`` prefix starts ``word``.

        Names never contain a colon, so the only candidate prefix is the text
        before the first colon; the first registered descriptor with that name
        is the first match in registry order.
        """
        colon_index = word.find(":")
        if colon_index < 1:
            return None
        return self._by_name.get(word[:colon_index])


def _normalize_option(
    option: TagOption,
    *,
    default_mode: DuplicateHandling,
    default_separator: str,
) -> TagDescriptor:
    if isinstance(option, TagDescriptor):
        raw: dict[str, Any] = option.model_dump(exclude_unset=True)
        raw.setdefault("mode", default_mode)
    elif isinstance(option, str):
        raw = {"name": option, "mode": default_mode}
    elif isinstance(option, Mapping):
        raw = dict(option)
        if "tag" in raw and "name" not in raw:
            raw["name"] = raw.pop("tag")
        if "type" in raw and "mode" not in raw:
            raw["mode"] = raw.pop("type")
        raw.setdefault("mode", default_mode)
    else:
        raise TagRegistryError(f"Unsupported tag option {option!r}; expected a name or a mapping")

    try:
        descriptor = TagDescriptor.model_validate(raw)
    except ValidationError as exc:
        raise TagRegistryError(f"Invalid tag option {option!r}: {exc}") from exc

    separator = descriptor.separator if descriptor.mode == DuplicateHandling.join else None
    return descriptor.model_copy(update={"separator": separator or default_separator})


def coerce_mode(mode: DuplicateHandling | str) -> DuplicateHandling:
    try:
        return DuplicateHandling(mode)
    except ValueError as exc:
        raise TagRegistryError(f"Unknown duplicate handling mode {mode!r}") from exc


def build_registry(
    options: TagRegistry | Iterable[TagOption],
    *,
    default_mode: DuplicateHandling | str = DuplicateHandling.overwrite,
    default_separator: str = DEFAULT_SEPARATOR,
) -> TagRegistry:
    if isinstance(options, TagRegistry):
        return options
    return TagRegistry.from_options(options, default_mode=default_mode, default_separator=default_separator)
