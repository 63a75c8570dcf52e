"""
Custom exceptions for codex-profiler.

All exceptions inherit from ProfilerError for easy catching. Each carries the
process exit code the CLI should return when it is raised.
"""


class ProfilerError(Exception):
    """Base exception for all codex-profiler errors."""

    exit_code: int = 1


class ConfigError(ProfilerError):
    """Settings file could not be read or validated."""
    pass


class StorageWriteError(ProfilerError):
    """Writing the profile store failed."""
    pass


class CommandError(ProfilerError):
    """Command parsing or execution errors."""
    pass


class InvalidCommandError(CommandError):
    """Invalid or unknown command."""
    pass


class CommandArgumentError(CommandError):
    """Invalid command arguments."""
    pass


class MissingProfileNameError(CommandArgumentError):
    """A verb that needs a profile name was called without one."""

    def __init__(self, verb: str) -> None:
        super().__init__(
            f"Please provide a profile name. Example: codex-profiler {verb} enterprise"
        )
        self.verb = verb


class ResolutionError(ProfilerError):
    """A profile could not be resolved from the configuration."""
    pass


class ProfileNotFoundError(ResolutionError):
    """Named profile does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Profile '{name}' does not exist. Create it with 'codex-profiler add {name}'."
        )
        self.name = name


class NoActiveProfileError(ResolutionError):
    """No profile has been selected as active."""

    def __init__(self) -> None:
        super().__init__("No active profile. Use 'codex-profiler use <name>' first.")


class ActiveProfileMissingError(ResolutionError):
    """The active pointer names a profile that is not stored."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"The active profile '{name}' is missing. "
            "Add it again with 'codex-profiler add <name>'."
        )
        self.name = name


class DispatchError(ProfilerError):
    """Dispatching a profile failed."""
    pass


class MissingSecretError(DispatchError):
    """Platform profile has no API key."""

    def __init__(self, name: str | None = None) -> None:
        label = f"'{name}' " if name else ""
        super().__init__(
            f"The active platform profile {label}does not have an API key. "
            "Recreate it with 'codex-profiler add <name>'."
        )
        self.name = name


class ChildProcessFailure(DispatchError):
    """External program failed to start or exited non-zero."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code if exit_code > 0 else 1
