"""Typer-based CLI for declsearch."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import __version__, config
from .config_manager import load_search_config, save_search_config
from .display import format_results, print_listing
from .errors import EmptyCandidateSetError, ExtractionError
from .extractor import extract
from .lexer import normalize_query
from .models import Category, EntityAggregate
from .ranking import best_match, search

console = Console()

app = typer.Typer(
    help="🔎 declsearch — fuzzy search over C/C++ declarations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    help="⚙️  Configuration — default limit and kind.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config")


class Lang(str, Enum):
    C = "c"
    CPP = "cpp"


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"declsearch v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """declsearch: find the declarations closest to a query in one source file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load(srcfile: Path, lang: Optional[Lang]) -> EntityAggregate:
    try:
        return extract(srcfile, lang.value if lang else None)
    except ExtractionError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("search")
def search_cmd(
    srcfile: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source or header file to search in."),
    query: Optional[str] = typer.Argument(None, help="The query to search for. Omit to print everything."),
    kind: Optional[Category] = typer.Option(None, "--kind", "-k", help="Declaration kind to search."),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Number of matches to list."),
    best: bool = typer.Option(False, "--best", "-b", help="Print only the single best match."),
    lang: Optional[Lang] = typer.Option(None, "--lang", "-l", help="Force the source language."),
    show_scores: bool = typer.Option(False, "--scores", help="Show the edit distance of each match."),
):
    """Rank declarations by edit distance to QUERY.

    Example:
      declsearch search util.h 'int (char *, int)'
      declsearch search shapes.hpp Circle --kind classes --best
    """
    entities = _load(srcfile, lang)
    if query is None:
        print_listing(entities, console)
        return

    settings = load_search_config()
    category = kind or Category.parse(settings["kind"])
    count = limit or settings["limit"]

    try:
        if best:
            typer.echo(best_match(entities.of(category), normalize_query(query), category.value))
            return
        scores = search(entities, category, query, limit=count)
    except EmptyCandidateSetError as exc:
        typer.echo(f"No {exc.category} found in {srcfile}.")
        raise typer.Exit(code=1)

    for line in format_results(scores, show_scores=show_scores):
        typer.echo(line)


@app.command("dump")
def dump(
    srcfile: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source or header file to list."),
    lang: Optional[Lang] = typer.Option(None, "--lang", "-l", help="Force the source language."),
):
    """Print every function, typedef, struct and class in SRCFILE."""
    print_listing(_load(srcfile, lang), console)


@config_app.command("show")
def config_show():
    """Show the search defaults in effect."""
    settings = load_search_config()
    typer.echo(f"Config file: {config.CONFIG_FILE}")
    typer.echo(f"limit = {settings['limit']}")
    typer.echo(f"kind  = {settings['kind']}")


@config_app.command("set")
def config_set(
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Default number of matches."),
    kind: Optional[Category] = typer.Option(None, "--kind", "-k", help="Default declaration kind."),
):
    """Update the search defaults."""
    if limit is None and kind is None:
        raise typer.BadParameter("Pass --limit and/or --kind.")
    settings = save_search_config(limit=limit, kind=kind.value if kind else None)
    typer.echo(f"Saved: limit = {settings['limit']}, kind = {settings['kind']}")
