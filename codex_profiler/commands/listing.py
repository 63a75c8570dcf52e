"""
list command - show stored profiles.
"""

from typing import TYPE_CHECKING

from codex_profiler.commands.base import BaseCommand
from codex_profiler.ui.display import display_info, display_profiles

if TYPE_CHECKING:
    from codex_profiler.cli import CodexProfiler


class ListCommand(BaseCommand):
    """List profiles in name order, marking the active one."""

    name = "list"
    description = "List profiles"
    usage = ""

    async def execute(self, app: "CodexProfiler", args: list[str]) -> int:
        if not app.configuration.profiles:
            display_info("No profiles configured. Run 'codex-profiler add <name>' first.")
            return 0
        display_profiles(app.configuration)
        return 0
