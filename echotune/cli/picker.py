"""
A small Rich-based interactive picker: type to search, then pick by number.
"""

from collections.abc import Sequence
from typing import TypeVar

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from .formatters import build_choice_table

T = TypeVar("T")

MAX_VISIBLE_CHOICES = 20


def search_items(items: Sequence[T], term: str) -> list[T]:
    """Case-insensitive substring match against each item's display string."""
    term = term.strip().lower()
    if not term:
        return list(items)
    return [item for item in items if term in str(item).lower()]


def pick_item(
    console: Console,
    items: Sequence[T],
    prompt: str,
    max_visible: int = MAX_VISIBLE_CHOICES,
) -> T:
    """
    Interactively selects one of items.

    Raises:
        ValueError: If items is empty.
    """
    if not items:
        raise ValueError("Nothing to pick from.")

    while True:
        term = Prompt.ask(
            f"[bold]{prompt}[/bold] [dim](type to search, Enter for all)[/dim]",
            console=console,
            default="",
            show_default=False,
        )
        matches = search_items(items, term)
        if not matches:
            console.print(f"[yellow]No matches for '{term}'.[/yellow]")
            continue
        if len(matches) == 1:
            return matches[0]

        visible = matches[:max_visible]
        title = f"{len(matches)} matches"
        if len(matches) > max_visible:
            title += f" (showing first {max_visible}, refine your search)"
        console.print(build_choice_table(visible, title))

        choice = IntPrompt.ask(
            "Select a number (0 to search again)", console=console, default=1
        )
        if 1 <= choice <= len(visible):
            return visible[choice - 1]
        if choice != 0:
            console.print(f"[red]✗ {choice} is not in the list.[/red]")
