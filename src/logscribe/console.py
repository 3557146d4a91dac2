"""Console input/output port and numbered menu helpers."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape


class ConsolePort(Protocol):
    """Minimal synchronous terminal interface used by the workflow."""

    def print(self, message: str = "") -> None: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def ask(self, prompt: str) -> str:
        """Read one line of input; raises :class:`EOFError` when input is exhausted."""


class RichConsolePort:
    """:class:`ConsolePort` backed by a Rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def print(self, message: str = "") -> None:
        self.console.print(escape(message))

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def success(self, message: str) -> None:
        self.console.print(f"[bold green]✔ {escape(message)}[/bold green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]✖ {escape(message)}[/bold red]")

    def ask(self, prompt: str) -> str:
        # EOFError propagates so the menu loop can shut down on a closed stdin.
        return self.console.input(f"[bold]{escape(prompt)}[/bold] ")


def render_menu(console: ConsolePort, title: str, options: Sequence[str]) -> None:
    """Print *options* as a numbered list under *title*."""

    console.print()
    console.print(title)
    console.print("-" * len(title))
    for index, option in enumerate(options, start=1):
        console.print(f"  {index}. {option}")
    console.print()


def parse_choice(raw: str, option_count: int) -> Optional[int]:
    try:
        choice = int(raw.strip())
    except ValueError:
        return None
    if 1 <= choice <= option_count:
        return choice
    return None


def read_choice(console: ConsolePort, prompt: str, option_count: int) -> Optional[int]:
    """Ask for a number between 1 and *option_count*; ``None`` when invalid."""

    return parse_choice(console.ask(prompt), option_count)
