from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# Progress output goes to stderr so --format json keeps stdout parseable.
console = Console(stderr=True, highlight=False)


def step(message: str) -> None:
    console.print(f"[blue]{message}[/blue]")


def done(message: str) -> None:
    console.print(f"[green]✔ {message}[/green]")


def warn(message: str) -> None:
    console.print(f"[yellow]⚠ {escape(message)}[/yellow]")
