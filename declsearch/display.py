"""Rich-based presentation of declaration listings and search results."""

from __future__ import annotations

from typing import List, Sequence

from rich.console import Console
from rich.table import Table

from . import config
from .models import Category, EntityAggregate, Score

_TITLES = {
    Category.FUNCTIONS: "FUNCTIONS",
    Category.TYPEDEFS: "TYPEDEFS",
    Category.STRUCTS: "STRUCTS",
    Category.CLASSES: "CLASSES",
}


def format_results(scores: Sequence[Score], show_scores: bool = False) -> List[str]:
    """One line per match, closest first."""
    lines = [config.BEST_MATCHES_HEADER]
    for s in scores:
        lines.append(f"{s.score:>4}  {s.id}" if show_scores else s.id)
    return lines


def build_table(entities: EntityAggregate, category: Category) -> Table:
    table = Table(title=_TITLES[category], title_justify="left", show_lines=False)
    table.add_column("Location", style="dim", no_wrap=True)
    table.add_column("Declaration", overflow="fold")
    for decl in entities.of(category):
        table.add_row(decl.source.repr(), decl.display_form())
    return table


def print_listing(entities: EntityAggregate, console: Console) -> None:
    """Print every category of *entities* as a table."""
    for category in Category:
        if entities.of(category):
            console.print(build_table(entities, category))
        else:
            console.print(f"[bold]{_TITLES[category]}[/bold]  [dim](none)[/dim]")
        console.print()
