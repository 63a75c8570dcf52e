"""
Map a requested name (or the active pointer) onto a stored profile.

Resolution only answers "which profile"; whether that profile can actually run
is decided at dispatch time.
"""

from __future__ import annotations

from dataclasses import dataclass

from codex_profiler.core.profile import Configuration, PlatformProfile, WebProfile
from codex_profiler.exceptions import (
    ActiveProfileMissingError,
    NoActiveProfileError,
    ProfileNotFoundError,
)


@dataclass(frozen=True)
class ResolvedProfile:
    name: str
    profile: PlatformProfile | WebProfile


def resolve_named(configuration: Configuration, name: str) -> PlatformProfile | WebProfile:
    """Exact, case-sensitive lookup.

    Raises:
        ProfileNotFoundError: If no profile is stored under ``name``.
    """
    profile = configuration.profiles.get(name)
    if profile is None:
        raise ProfileNotFoundError(name)
    return profile


def resolve_active(configuration: Configuration) -> ResolvedProfile:
    """Resolve the active profile.

    Raises:
        NoActiveProfileError: If no active profile is set.
        ActiveProfileMissingError: If the active name is not a stored profile.
    """
    name = configuration.active
    if not name:
        raise NoActiveProfileError()
    profile = configuration.profiles.get(name)
    if profile is None:
        raise ActiveProfileMissingError(name)
    return ResolvedProfile(name=name, profile=profile)
