"""
add command - create or replace a profile interactively.
"""

from typing import TYPE_CHECKING

from codex_profiler.commands.base import BaseCommand, require_name
from codex_profiler.core.profile import ProfileKind, make_profile
from codex_profiler.ui.display import display_info, display_success

if TYPE_CHECKING:
    from codex_profiler.cli import CodexProfiler


class AddCommand(BaseCommand):
    """Create a profile; the first one added becomes active."""

    name = "add"
    description = "Create a profile (prompts for its type and API key)"
    usage = "<profile-name>"

    async def execute(self, app: "CodexProfiler", args: list[str]) -> int:
        name = require_name(self.name, args)

        kind = await self._prompt_kind(app)
        api_key = None
        if kind is ProfileKind.PLATFORM:
            api_key = await self._prompt_api_key(app)

        configuration = app.configuration
        profiles = dict(configuration.profiles)
        profiles[name] = make_profile(kind, api_key)
        active = configuration.active or name
        app.update_configuration(configuration.model_copy(update={"profiles": profiles, "active": active}))

        suffix = " (active)" if active == name else ""
        display_success(f"Profile '{name}' saved{suffix}.")
        return 0

    async def _prompt_kind(self, app: "CodexProfiler") -> ProfileKind:
        while True:
            value = (await app.prompt("Profile type (platform/web): ")).lower()
            if value in (ProfileKind.PLATFORM.value, ProfileKind.WEB.value):
                return ProfileKind(value)
            display_info("Please enter either 'platform' or 'web'.")

    async def _prompt_api_key(self, app: "CodexProfiler") -> str:
        while True:
            api_key = await app.prompt("OpenAI API key: ", secret=True)
            if api_key:
                return api_key
            display_info("The API key cannot be empty.")
