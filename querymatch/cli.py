#!/usr/bin/env python3
"""
querymatch CLI - try expressions against documents

Usage:
    querymatch match <expression> <file> [--engine jq|jsonpath|yq]
    querymatch extract <expression> <file> [--engine jq|jsonpath]
    querymatch --version
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .assertions import evaluate, jq, jsonpath, yq
from .config import configure, load_config
from .errors import QueryMatchError

app = typer.Typer(
    name="querymatch",
    help="querymatch - evaluate jq, JSONPath and yq expressions against documents",
    add_completion=False,
)
console = Console()


class Engine(str, Enum):
    JQ = "jq"
    JSONPATH = "jsonpath"
    YQ = "yq"


def version_callback(value: bool):
    if value:
        console.print(f"querymatch v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="YAML file with formatting options",
        exists=True,
        readable=True,
    ),
    debug: bool = typer.Option(
        False, "--debug",
        help="Log conversion and evaluation details"
    ),
):
    """
    querymatch - evaluate query expressions against documents

    Useful for developing the expressions used in test assertions.
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )

    if config_file is not None:
        try:
            configure(load_config(config_file))
        except QueryMatchError as e:
            console.print(f"[red]Invalid config:[/red] {escape(str(e))}")
            raise typer.Exit(code=2)


@app.command()
def match(
    expression: str = typer.Argument(..., help="Boolean expression to evaluate"),
    document: Path = typer.Argument(
        ...,
        help="JSON file (jq, jsonpath) or YAML file (yq)",
        exists=True,
        readable=True,
    ),
    engine: Engine = typer.Option(Engine.JQ, "--engine", "-e", help="Expression language"),
):
    """
    Check whether a document matches an expression.

    Exits 0 on a match, 1 on no match and 2 when the expression or the
    document is invalid.
    """
    if engine == Engine.YQ:
        matcher = yq.match(expression)
        result = evaluate(matcher, document.read_text())
    else:
        matcher = jq.match(expression) if engine == Engine.JQ else jsonpath.match(expression)
        with open(document, "rb") as f:
            result = evaluate(matcher, f)

    if result.passed:
        console.print(f"[green]Matched:[/green] {expression}")
        raise typer.Exit(code=0)
    elif result.failed:
        console.print(f"[yellow]No match:[/yellow] {expression}")
        raise typer.Exit(code=1)
    else:
        console.print(f"[red]Error:[/red] {escape(str(result.error))}")
        raise typer.Exit(code=2)


@app.command()
def extract(
    expression: str = typer.Argument(..., help="Expression selecting a value"),
    document: Path = typer.Argument(
        ...,
        help="JSON file to query",
        exists=True,
        readable=True,
    ),
    engine: Engine = typer.Option(Engine.JQ, "--engine", "-e", help="Expression language"),
):
    """
    Print the first value an expression selects, as JSON.
    """
    if engine == Engine.YQ:
        console.print("[red]Error:[/red] extract supports the jq and jsonpath engines")
        raise typer.Exit(code=2)

    transform = jq.extract(expression) if engine == Engine.JQ else jsonpath.extract(expression)

    try:
        with open(document, "rb") as f:
            value = transform(f)
    except QueryMatchError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)

    console.print_json(data=value)


if __name__ == "__main__":
    app()
