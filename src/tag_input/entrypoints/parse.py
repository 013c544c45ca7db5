from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from tag_input.domain.models import DuplicateHandling, ParseResult
from tag_input.registry import TagRegistry, TagRegistryError
from tag_input.result_schemas import parse_result_json_schema, tag_descriptor_json_schema
from tag_input.tag_config import TagConfigError, TagInputConfig, load_tag_input_config
from tag_input.tag_parsing import parse_input_text


def parse_tag_spec(spec: str) -> dict[str, Any]:
    """Turn ``name[:mode[:separator]]`` into a tag option mapping."""
    name, _, rest = spec.partition(":")
    option: dict[str, Any] = {"name": name}
    if rest:
        mode, has_separator, separator = rest.partition(":")
        option["mode"] = mode
        if has_separator:
            option["separator"] = separator
    return option


def run_parse(
    *,
    text: str,
    config_path: Path | None,
    tag_specs: list[str],
    mode: DuplicateHandling | None,
    separator: str | None,
    as_json: bool,
) -> None:
    config = _load_config(config_path)
    if mode is not None or separator is not None:
        try:
            config = config.with_defaults(default_mode=mode, default_separator=separator)
        except TagRegistryError as exc:
            raise typer.BadParameter(str(exc), param_hint="--config") from exc
    default_mode = config.default_mode
    default_separator = config.default_separator

    registry = config.registry
    if tag_specs:
        try:
            registry = TagRegistry.from_options(
                [parse_tag_spec(spec) for spec in tag_specs],
                default_mode=default_mode,
                default_separator=default_separator,
            )
        except TagRegistryError as exc:
            raise typer.BadParameter(str(exc), param_hint="--tag") from exc

    result = parse_input_text(text, registry, default_mode, default_separator)
    if as_json:
        typer.echo(result.to_json())
        return
    typer.echo("\n".join(_render_result(result)))


def run_schema(*, kind: str) -> None:
    if kind == "result":
        schema = parse_result_json_schema()
    elif kind == "descriptor":
        schema = tag_descriptor_json_schema()
    else:
        raise typer.BadParameter("kind must be 'result' or 'descriptor'", param_hint="--kind")
    typer.echo(json.dumps(schema, indent=2))


def _load_config(config_path: Path | None) -> TagInputConfig:
    try:
        return load_tag_input_config(config_path)
    except TagConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _render_result(result: ParseResult) -> list[str]:
    lines = [f"Default Text: {result.default_text}", "Tags:"]
    if not result.tags:
        lines.append("  No tags detected yet")
    for name, value in result.tags.items():
        shown = ", ".join(value) if isinstance(value, list) else value
        lines.append(f"  {name}: {shown}")
    lines.append(f"Detected: {', '.join(result.detected_order) or 'none'}")
    return lines
