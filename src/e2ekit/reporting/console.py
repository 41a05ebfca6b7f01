"""Rich-powered console output."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from e2ekit.models import SCREEN_SIZES, StepResult

_console = Console()


def print_banner() -> None:
    """Display the startup banner."""
    _console.print(
        Panel.fit(
            "[bold cyan]e2ekit[/bold cyan]  —  Browser session check",
            border_style="cyan",
        )
    )


def print_step(step: StepResult, index: int) -> None:
    """Print a single check result line."""
    style = "bold green" if step.passed else "bold red"
    label = "ok" if step.passed else "FAILED"
    _console.print(
        f"  [{style}]{index:>3}[/{style}]  "
        f"[{style}]{label:<7}[/{style}]  "
        f"{step.name}  [dim]{step.duration_ms} ms[/dim]"
    )
    if step.detail and not step.passed:
        _console.print(f"         [dim red]{step.detail}[/dim red]")


def print_check_report(
    steps: list[StepResult],
    url: str,
    session_id: str,
    screenshot: Path | None = None,
) -> None:
    """Display a summary table for one check run."""
    table = Table(title="Check Report", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    passed = sum(1 for s in steps if s.passed)
    table.add_row("URL", url)
    table.add_row("Steps passed", f"{passed}/{len(steps)}")
    table.add_row("Session ID", session_id or "—")
    table.add_row("Screenshot", str(screenshot) if screenshot else "—")

    _console.print()
    _console.print(table)
    _console.print()


def print_screen_sizes() -> None:
    table = Table(title="Screen sizes", show_header=True, header_style="bold magenta")
    table.add_column("Class", style="cyan")
    table.add_column("Width", justify="right")
    table.add_column("Height", justify="right")
    for name, size in SCREEN_SIZES.items():
        table.add_row(name, str(size.width), str(size.height))
    _console.print(table)


def print_error(message: str) -> None:
    """Report a fatal error without a traceback."""
    _console.print(f"[bold red]Error:[/bold red] {message}")
