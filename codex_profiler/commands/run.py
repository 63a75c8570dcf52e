"""
run command - dispatch the active profile.
"""

from typing import TYPE_CHECKING

from codex_profiler.commands.base import BaseCommand
from codex_profiler.core.profile import WebProfile
from codex_profiler.core.resolver import resolve_active
from codex_profiler.ui.display import display_info, display_warning

if TYPE_CHECKING:
    from codex_profiler.cli import CodexProfiler


class RunCommand(BaseCommand):
    """Run codex with the active profile's key, or open ChatGPT for web profiles."""

    name = "run"
    description = "Run codex with the active profile"
    usage = "[codex-args...]"

    async def execute(self, app: "CodexProfiler", args: list[str]) -> int:
        resolved = resolve_active(app.configuration)
        if isinstance(resolved.profile, WebProfile):
            display_info("Opening ChatGPT Plus in your browser...")

        outcome = app.dispatcher.dispatch(resolved.profile, args, name=resolved.name)
        if outcome.soft_failure and outcome.message:
            display_warning(outcome.message)
        return outcome.exit_code
