"""
Command system for codex-profiler.

Each verb on the command line (add, use, list, run) maps to a command class.
"""

from codex_profiler.commands.base import BaseCommand
from codex_profiler.commands.add import AddCommand
from codex_profiler.commands.use import UseCommand
from codex_profiler.commands.listing import ListCommand
from codex_profiler.commands.run import RunCommand

# Command registry. The help command is resolved lazily to avoid circular import.
COMMANDS: dict[str, type[BaseCommand] | None] = {
    "add": AddCommand,
    "use": UseCommand,
    "list": ListCommand,
    "run": RunCommand,
    "help": None,
}

HELP_ALIASES = {"help", "-h", "--help"}


def get_command(name: str) -> BaseCommand | None:
    """Get command instance by verb.

    Args:
        name: Verb as typed; matched case-insensitively.

    Returns:
        Command instance or None if not found.
    """
    name_lower = name.lower()
    if name_lower in HELP_ALIASES:
        from codex_profiler.commands.help import HelpCommand  # Local import to avoid circular
        return HelpCommand()

    cmd_class = COMMANDS.get(name_lower)
    if cmd_class is None:
        return None
    return cmd_class()


__all__ = [
    "BaseCommand",
    "get_command",
    "COMMANDS",
]
