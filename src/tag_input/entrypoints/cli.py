from pathlib import Path
from typing import Annotated

import typer

from tag_input.domain.models import DuplicateHandling

app = typer.Typer(add_completion=False)


@app.callback()
def main_callback(
    *,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Emit debug logs on stderr.")] = False,
) -> None:
    """Extract name:value tags from free text."""
    if verbose:
        from loguru import logger

        logger.enable("tag_input")


@app.command()
def version() -> None:
    """Print version."""
    from tag_input import __version__

    typer.echo(__version__)


@app.command()
def parse(
    text: Annotated[str, typer.Argument(help="Raw input line to parse.")],
    *,
    config: Annotated[
        Path | None,
        typer.Option(
            exists=True,
            dir_okay=False,
            help="YAML config with a tag_input section (default: $TAG_INPUT_CONFIG or ~/.config/tag-input/config.yaml).",
        ),
    ] = None,
    tag: Annotated[
        list[str] | None,
        typer.Option(
            "--tag",
            "-t",
            help="Recognized tag as name[:mode[:separator]]; repeatable. Replaces configured tags.",
        ),
    ] = None,
    mode: Annotated[
        DuplicateHandling | None,
        typer.Option(help="Duplicate handling for bare names and dynamic tags."),
    ] = None,
    separator: Annotated[
        str | None,
        typer.Option(help="Separator for join mode when a tag sets none."),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the parse result as JSON.")] = False,
) -> None:
    """Split TEXT into default text and tags."""
    from tag_input.entrypoints.parse import run_parse

    run_parse(
        text=text,
        config_path=config,
        tag_specs=list(tag or []),
        mode=mode,
        separator=separator,
        as_json=as_json,
    )


@app.command()
def schema(
    *,
    kind: Annotated[str, typer.Option(help="Schema to print: result or descriptor.")] = "result",
) -> None:
    """Print a JSON schema."""
    from tag_input.entrypoints.parse import run_schema

    run_schema(kind=kind)


def main() -> None:
    app()
