"""
use command - select the active profile.
"""

from typing import TYPE_CHECKING

from codex_profiler.commands.base import BaseCommand, require_name
from codex_profiler.core.resolver import resolve_named
from codex_profiler.ui.display import display_success

if TYPE_CHECKING:
    from codex_profiler.cli import CodexProfiler


class UseCommand(BaseCommand):
    """Make an existing profile the active one."""

    name = "use"
    description = "Set the active profile"
    usage = "<profile-name>"

    async def execute(self, app: "CodexProfiler", args: list[str]) -> int:
        name = require_name(self.name, args)
        resolve_named(app.configuration, name)
        app.update_configuration(app.configuration.model_copy(update={"active": name}))
        display_success(f"Active profile set to '{name}'.")
        return 0
