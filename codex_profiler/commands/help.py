"""
help command - display usage.
"""

from typing import TYPE_CHECKING

from rich.console import Console

from codex_profiler.commands.base import BaseCommand
from codex_profiler.ui.display import display_usage

if TYPE_CHECKING:
    from codex_profiler.cli import CodexProfiler


console = Console()


class HelpCommand(BaseCommand):
    """Display usage, or help for a specific command."""

    name = "help"
    description = "Show usage or help for a specific command"
    usage = "[command]"

    async def execute(self, app: "CodexProfiler", args: list[str]) -> int:
        from codex_profiler.commands import get_command  # Local import to avoid circular

        if args:
            cmd = get_command(args[0])
            if cmd is not None:
                console.print(f"\n{cmd.get_help()}\n")
                return 0
        display_usage(app.settings.config_path)
        return 0
