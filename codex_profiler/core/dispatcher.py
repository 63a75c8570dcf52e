"""
Hand a resolved profile off to an external program.

Platform profiles run the codex CLI with the API key in its environment; web
profiles open ChatGPT through the first browser launcher that starts.
Commands are always executed as argument vectors, never through a shell.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

from codex_profiler.config import Settings
from codex_profiler.core.profile import PlatformProfile, WebProfile
from codex_profiler.exceptions import ChildProcessFailure, MissingSecretError

logger = logging.getLogger(__name__)

Runner = Callable[..., Any]


def shell_quote(value: str) -> str:
    """Quote a single argument for a POSIX shell.

    The value is wrapped in single quotes and embedded single quotes become
    ``'\\''``, so spaces and metacharacters are taken literally.
    """
    if value == "":
        return "''"
    return "'" + value.replace("'", "'\\''") + "'"


def _note_interrupt(signum: int, frame: Any) -> None:
    logger.debug("Interrupt received; waiting for the child to exit")


@contextmanager
def _wait_through_interrupts() -> Iterator[None]:
    """Keep SIGINT from aborting the wait on a foreground child.

    Installs a Python-level handler rather than SIG_IGN; exec resets it to the
    default in the child.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, _note_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)


def _merge_env(extra: dict[str, str] | None) -> dict[str, str]:
    merged = {str(k): str(v) for k, v in os.environ.items()}
    if extra:
        merged.update({str(k): str(v) for k, v in extra.items()})
    return merged


@dataclass(frozen=True)
class Command:
    """An argument vector plus environment overrides."""

    argv: list[str]
    env: dict[str, str] = field(default_factory=dict)

    def display(self) -> str:
        """Shell-quoted rendering, for logs only. Environment is not shown."""
        return " ".join(shell_quote(part) for part in self.argv)


@dataclass(frozen=True)
class ExitOutcome:
    """Result of a dispatch that did not raise.

    ``soft_failure`` marks a failure that is reported as a warning rather than
    an error (the browser could not be opened).
    """

    exit_code: int = 0
    launcher: str | None = None
    message: str | None = None
    soft_failure: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def browser_launchers(platform: str) -> list[str]:
    """Launcher programs to try, in order, for ``platform``."""
    if platform == "darwin":
        return ["open", "xdg-open"]
    return ["xdg-open", "open"]


class Dispatcher:
    """Run or open a profile."""

    def __init__(
        self,
        settings: Settings,
        *,
        runner: Runner | None = None,
        platform: str | None = None,
    ) -> None:
        self.settings = settings
        self._runner = runner
        self.platform = platform or sys.platform

    def _run(self, *args: Any, **kwargs: Any) -> Any:
        # Looked up at call time so tests can patch subprocess.run.
        runner = self._runner or subprocess.run
        return runner(*args, **kwargs)

    def build_platform_command(
        self,
        profile: PlatformProfile,
        args: Sequence[str],
        *,
        name: str | None = None,
    ) -> Command:
        if not profile.api_key:
            raise MissingSecretError(name)
        return Command(
            argv=[self.settings.program, *[str(arg) for arg in args]],
            env={self.settings.api_key_env: profile.api_key},
        )

    def dispatch(
        self,
        profile: PlatformProfile | WebProfile,
        args: Sequence[str] = (),
        *,
        name: str | None = None,
    ) -> ExitOutcome:
        """Dispatch ``profile`` with the trailing ``args``.

        Raises:
            MissingSecretError: Platform profile without an API key.
            ChildProcessFailure: The program failed to start or exited non-zero.
        """
        if isinstance(profile, PlatformProfile):
            return self.run_platform(self.build_platform_command(profile, args, name=name))
        return self.open_web()

    def run_platform(self, command: Command) -> ExitOutcome:
        program = command.argv[0]
        logger.debug("Running %s", command.display())
        try:
            with _wait_through_interrupts():
                completed = self._run(command.argv, env=_merge_env(command.env), check=False)
        except FileNotFoundError as exc:
            raise ChildProcessFailure(
                f"Unable to start '{program}': executable not found. Is it installed and on PATH?",
                exit_code=127,
            ) from exc
        except OSError as exc:
            raise ChildProcessFailure(f"Unable to start '{program}': {exc}", exit_code=126) from exc

        returncode = completed.returncode
        if returncode != 0:
            if returncode < 0:
                raise ChildProcessFailure(
                    f"'{program}' was terminated by signal {-returncode}",
                    exit_code=128 - returncode,
                )
            raise ChildProcessFailure(f"'{program}' exited with status {returncode}", exit_code=returncode)
        return ExitOutcome(exit_code=0)

    def open_web(self) -> ExitOutcome:
        url = self.settings.web_url
        for launcher in browser_launchers(self.platform):
            command = Command(argv=[launcher, url])
            logger.debug("Trying browser launcher %s", command.display())
            try:
                self._run(
                    command.argv,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    check=True,
                )
            except (OSError, subprocess.SubprocessError) as exc:
                logger.debug("Launcher %s failed: %s", launcher, exc)
                continue
            return ExitOutcome(exit_code=0, launcher=launcher)

        return ExitOutcome(
            exit_code=1,
            message=f"Unable to open a browser automatically. Please visit {url}.",
            soft_failure=True,
        )
