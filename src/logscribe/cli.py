"""Command line entry point for logscribe."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import AppPaths
from .console import RichConsolePort
from .workflow import StartupError, Workflow

app = typer.Typer(add_completion=False, help="Analyze local log files with a locally hosted LLM.")
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


@app.command()
def run(
    base_dir: Path = typer.Option(
        Path("."),
        "--base-dir",
        "-d",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Folder holding logs/, reports/, prompts/ and config.json.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Open the interactive menu."""

    _configure_logging(verbose)
    console.rule("[bold cyan]Log Analyzer[/bold cyan]")

    workflow = Workflow(AppPaths.from_base(base_dir), RichConsolePort(console))
    try:
        exit_code = workflow.run()
    except StartupError as exc:
        console.print(f"[bold red]Startup failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    raise typer.Exit(code=exit_code)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
