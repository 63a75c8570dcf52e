"""
Command routing for codex-profiler.

This module handles:
- Loading settings and the profile store
- Routing the verb to a command
- Turning errors into messages and exit codes
"""

import logging
from typing import Awaitable, Callable, Sequence

from rich.console import Console
from rich.logging import RichHandler

from codex_profiler.commands import get_command
from codex_profiler.config import Settings, load_settings
from codex_profiler.core.dispatcher import Dispatcher
from codex_profiler.core.profile import Configuration
from codex_profiler.core.store import ProfileStore
from codex_profiler.exceptions import InvalidCommandError, ProfilerError
from codex_profiler.ui.display import display_error, display_usage, display_warning
from codex_profiler.ui.input import get_user_input


logger = logging.getLogger(__name__)

PromptFunc = Callable[..., Awaitable[str]]


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=False,
    )
    root = logging.getLogger("codex_profiler")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


class CodexProfiler:
    """Per-invocation application state."""

    def __init__(
        self,
        settings: Settings,
        *,
        store: ProfileStore | None = None,
        dispatcher: Dispatcher | None = None,
        prompt: PromptFunc | None = None,
    ) -> None:
        """Initialize the application.

        Args:
            settings: Application settings.
            store: Profile store; defaults to the JSON file from settings.
            dispatcher: Dispatcher; defaults to one using subprocess.
            prompt: Coroutine used to ask the user for a line of text.
        """
        self.settings = settings
        self.store = store or ProfileStore(settings.config_path)
        self.dispatcher = dispatcher or Dispatcher(settings)
        self._prompt = prompt or get_user_input
        self.configuration: Configuration = self.store.load()
        for warning in self.store.warnings:
            display_warning(warning)

    async def prompt(self, message: str, *, secret: bool = False) -> str:
        return await self._prompt(message, secret=secret)

    def update_configuration(self, configuration: Configuration) -> None:
        """Persist ``configuration`` and make it current.

        Raises:
            StorageWriteError: If the store cannot be written.
        """
        self.store.save(configuration)
        self.configuration = configuration

    async def handle(self, argv: Sequence[str]) -> int:
        """Route ``argv`` (verb followed by its arguments) to a command."""
        if not argv or not argv[0]:
            display_usage(self.settings.config_path)
            return 0

        verb, args = argv[0], list(argv[1:])
        command = get_command(verb)
        try:
            if command is None:
                raise InvalidCommandError(f"Unknown command '{verb.lower()}'.")
            return await command.execute(self, args)
        except InvalidCommandError as exc:
            display_error(str(exc))
            display_usage(self.settings.config_path)
            return exc.exit_code
        except ProfilerError as exc:
            logger.debug("%s failed: %s", verb, exc, exc_info=True)
            display_error(str(exc))
            return exc.exit_code


async def run_cli(argv: Sequence[str]) -> int:
    """Run codex-profiler with command-line arguments.

    Args:
        argv: Arguments after the program name.

    Returns:
        Exit code (0 for success).
    """
    try:
        settings = load_settings()
    except ProfilerError as exc:
        display_error(str(exc))
        return exc.exit_code

    configure_logging(settings.log_level)
    app = CodexProfiler(settings)
    return await app.handle(argv)
