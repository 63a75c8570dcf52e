"""
Display utilities for terminal output.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from codex_profiler.core.profile import Configuration


console = Console(highlight=False, soft_wrap=True)
error_console = Console(stderr=True, highlight=False, soft_wrap=True)


def display_error(message: str) -> None:
    """Display an error message on stderr.

    Args:
        message: Error message to display.
    """
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def display_info(message: str) -> None:
    """Display an info message.

    Args:
        message: Info message to display.
    """
    console.print(f"[cyan]ℹ[/cyan] {escape(message)}")


def display_success(message: str) -> None:
    """Display a success message.

    Args:
        message: Success message to display.
    """
    console.print(f"[green]✓[/green] {escape(message)}")


def display_warning(message: str) -> None:
    """Display a warning message on stderr.

    Args:
        message: Warning message to display.
    """
    error_console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def display_usage(config_path: Path) -> None:
    """Display CLI usage.

    Args:
        config_path: Where profiles are stored.
    """
    console.print("[bold]Usage:[/bold]")
    for line in (
        "codex-profiler add <profile-name>",
        "codex-profiler use <profile-name>",
        "codex-profiler list",
        "codex-profiler run [codex-args...]",
    ):
        console.print(f"  [yellow]{escape(line)}[/yellow]")
    console.print()
    console.print(f"Profiles are stored in {escape(str(config_path))}.")


def display_profiles(configuration: Configuration) -> None:
    """Display stored profiles, sorted by name, marking the active one.

    Args:
        configuration: Loaded configuration.
    """
    console.print("[bold]Profiles[/bold]")
    for name in configuration.sorted_names():
        kind = configuration.profiles[name].type
        if name == configuration.active:
            console.print(f"[green]→ {escape(name)}[/green] ({kind})")
        else:
            console.print(f"  {escape(name)} ({kind})")
