"""Braces CLI Main Entry Point

Usage:
    braces render page.html -d data.yaml        # Render a template file
    braces render page.html -r templates/       # ... relative to a root
    braces render -s "{{= 1+1 }}"               # Render template text
    braces source page.html                     # Show generated Python
    braces --version                            # Show version
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from braces._version import __version__
from braces.engine import Engine

from .utils import build_options, load_data, setup_logging

log = logging.getLogger(__name__)

typer_app = typer.Typer(
    help="Compile and render brace-tag templates.", no_args_is_help=True
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"braces {__version__}")
        raise typer.Exit()


@typer_app.callback()
def cli(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Compile and render brace-tag templates."""


def _fail(exc: Exception) -> typer.Exit:
    log.debug("Command failed", exc_info=exc)
    typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
    return typer.Exit(code=1)


@typer_app.command()
def render(
    template: str = typer.Argument(
        ..., help="Template file (relative to root), or template text with -s."
    ),
    data: Optional[Path] = typer.Option(
        None, "-d", "--data", help="JSON or YAML file with the data record."
    ),
    root: Optional[Path] = typer.Option(
        None, "-r", "--root", help="Directory template paths are relative to."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to a braces.yaml config file."
    ),
    string: bool = typer.Option(
        False, "-s", "--string", help="Treat TEMPLATE as template text."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the result to a file."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
) -> None:
    """Render a template with a data record.

    \b
    Examples:
        braces render index.html -d data.json
        braces render -s "Hi {{= name }}" -d data.yaml
    """
    setup_logging(verbose)
    try:
        engine = Engine(build_options(config, root))
        record = load_data(data)
        if string:
            text = engine.render(template, record)
        else:
            text = asyncio.run(engine.view(template, record))
    except Exception as exc:
        raise _fail(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        log.info("Wrote %s", output)
    else:
        typer.echo(text)


@typer_app.command()
def source(
    template: str = typer.Argument(
        ..., help="Template file (relative to root), or template text with -s."
    ),
    root: Optional[Path] = typer.Option(
        None, "-r", "--root", help="Directory template paths are relative to."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to a braces.yaml config file."
    ),
    string: bool = typer.Option(
        False, "-s", "--string", help="Treat TEMPLATE as template text."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
) -> None:
    """Print the Python source generated for a template."""
    setup_logging(verbose)
    try:
        engine = Engine(build_options(config, root))
        text = template if string else asyncio.run(engine.load(template))
        generated = engine.compiler.generate(text)
    except Exception as exc:
        raise _fail(exc)

    typer.echo(generated.source)
    for problem in generated.problems:
        typer.secho(f"Warning: {problem}", err=True, fg=typer.colors.YELLOW)
    if generated.problems:
        raise typer.Exit(code=1)


def app() -> None:
    """Entry point for the CLI."""
    typer_app()


if __name__ == "__main__":
    app()
