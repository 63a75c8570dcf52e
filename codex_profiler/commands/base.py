"""
Base command class for codex-profiler commands.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from codex_profiler.exceptions import MissingProfileNameError

if TYPE_CHECKING:
    from codex_profiler.cli import CodexProfiler


class BaseCommand(ABC):
    """Abstract base class for commands."""

    name: str = ""
    description: str = ""
    usage: str = ""

    @abstractmethod
    async def execute(self, app: "CodexProfiler", args: list[str]) -> int:
        """Execute the command.

        Args:
            app: The CodexProfiler application instance.
            args: Arguments following the verb.

        Returns:
            Process exit code.

        Raises:
            ProfilerError: On any user-facing failure.
        """
        pass

    def get_help(self) -> str:
        """Get detailed help for this command.

        Returns:
            Help text string.
        """
        help_text = f"codex-profiler {self.name}"
        if self.usage:
            help_text += f" {self.usage}"
        help_text += f"\n\n{self.description}"
        return help_text


def require_name(verb: str, args: list[str]) -> str:
    """First argument, trimmed; raises when it is missing or blank."""
    name = args[0].strip() if args else ""
    if not name:
        raise MissingProfileNameError(verb)
    return name
