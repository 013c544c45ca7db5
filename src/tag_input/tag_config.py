from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from tag_input.domain.models import DuplicateHandling, ParseResult
from tag_input.registry import DEFAULT_SEPARATOR, TagRegistry, TagRegistryError, coerce_mode
from tag_input.tag_parsing import parse_input_text


class TagConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class TagInputConfig:
    registry: TagRegistry = field(default_factory=TagRegistry)
    default_mode: DuplicateHandling = DuplicateHandling.overwrite
    default_separator: str = DEFAULT_SEPARATOR
    source: str = "defaults"
    tag_options: tuple[Any, ...] = ()

    def with_defaults(
        self,
        *,
        default_mode: DuplicateHandling | str | None = None,
        default_separator: str | None = None,
    ) -> TagInputConfig:
        """Rebuild the registry so bare names and separator-less joins use new defaults."""
        mode = coerce_mode(default_mode) if default_mode is not None else self.default_mode
        separator = default_separator if default_separator is not None else self.default_separator
        registry = TagRegistry.from_options(self.tag_options, default_mode=mode, default_separator=separator)
        return replace(self, registry=registry, default_mode=mode, default_separator=separator)

    def parse(self, raw_text: str) -> ParseResult:
        return parse_input_text(raw_text, self.registry, self.default_mode, self.default_separator)


def global_config_path() -> Path:
    override = os.environ.get("TAG_INPUT_CONFIG")
    if override:
        return Path(override).expanduser()
    root = os.environ.get("XDG_CONFIG_HOME")
    if root:
        base = Path(root)
    else:
        base = Path.home() / ".config"
    return base / "tag-input" / "config.yaml"


def load_tag_input_config(path: Path | None = None) -> TagInputConfig:
    config_path = path if path is not None else global_config_path()
    data = _load_yaml_mapping(config_path)
    section = _extract_tag_input_section(data, source=config_path)
    if not section:
        logger.debug(f"No tag_input section at {config_path}; using defaults")
        return TagInputConfig()
    config = parse_tag_input_section(section, source=str(config_path))
    logger.debug(f"Loaded {len(config.registry)} tag option(s) from {config_path}")
    return config


def parse_tag_input_section(section: Mapping[str, Any], *, source: str = "<memory>") -> TagInputConfig:
    unknown = sorted(set(section) - {"default_mode", "default_separator", "tags"})
    if unknown:
        raise TagConfigError(f"Unknown tag_input keys in {source}: {', '.join(unknown)}")

    default_separator = section.get("default_separator", DEFAULT_SEPARATOR)
    if not isinstance(default_separator, str):
        raise TagConfigError(f"Expected string for tag_input.default_separator in {source}")

    tags_raw = section.get("tags") or []
    if not isinstance(tags_raw, list):
        raise TagConfigError(f"Expected list for tag_input.tags in {source}")

    try:
        default_mode = coerce_mode(section.get("default_mode", DuplicateHandling.overwrite))
        registry = TagRegistry.from_options(
            tags_raw,
            default_mode=default_mode,
            default_separator=default_separator,
        )
    except TagRegistryError as exc:
        raise TagConfigError(f"Invalid tag_input config in {source}: {exc}") from exc

    return TagInputConfig(
        registry=registry,
        default_mode=default_mode,
        default_separator=default_separator,
        source=source,
        tag_options=tuple(tags_raw),
    )


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise TagConfigError(f"Invalid YAML at {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise TagConfigError(f"Expected mapping YAML at {path}")
    return dict(loaded)


def _extract_tag_input_section(data: Mapping[str, Any], *, source: Path | str) -> dict[str, Any]:
    raw = data.get("tag_input")
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise TagConfigError(f"Expected mapping for tag_input in {source}")
    return {str(key): value for key, value in raw.items()}
