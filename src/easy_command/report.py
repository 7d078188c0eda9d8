"""Rendering of execution errors and their cause chains."""

from __future__ import annotations

from typing import Iterator

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

__all__ = [
    "format_error",
    "format_error_chain",
    "iter_error_chain",
    "print_error",
    "render_error",
]


def iter_error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield ``error`` followed by each exception it was caused by."""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def format_error(error: BaseException) -> str:
    """Single-line message for one link of a chain."""
    message = str(error)
    return message or type(error).__name__


def format_error_chain(error: BaseException) -> list[str]:
    """Messages of the chain, skipping wrappers that only repeat their cause."""
    return [
        format_error(link)
        for link in iter_error_chain(error)
        if not getattr(link, "transparent", False)
    ]


def render_error(error: BaseException) -> Tree:
    """Build a Rich tree with the top-level message as root and causes nested beneath."""
    links = format_error_chain(error)
    root = Tree(Text(links[0], style="bold red"))
    node = root
    for message in links[1:]:
        node = node.add(Text(f"caused by: {message}", style="red"))
    return root


def print_error(error: BaseException, console: Console | None = None) -> None:
    if console is None:
        console = Console(stderr=True)
    console.print(render_error(error))
