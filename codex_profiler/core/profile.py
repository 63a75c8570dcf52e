"""
Profile data model.

A profile is a tagged variant: a platform profile runs the codex CLI with an
API key, a web profile opens ChatGPT in the browser. The persisted field names
(``active``, ``profiles``, ``type``, ``apiKey``) are part of the on-disk format.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ProfileKind(str, Enum):
    PLATFORM = "platform"
    WEB = "web"


class PlatformProfile(BaseModel):
    """Runs the external program with the API key injected."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: Literal["platform"] = "platform"
    api_key: str | None = Field(default=None, alias="apiKey")

    @property
    def kind(self) -> ProfileKind:
        return ProfileKind.PLATFORM

    @property
    def has_secret(self) -> bool:
        return bool(self.api_key)


class WebProfile(BaseModel):
    """Opens the web UI; never carries a secret."""

    model_config = ConfigDict(frozen=True)

    type: Literal["web"] = "web"

    @property
    def kind(self) -> ProfileKind:
        return ProfileKind.WEB


Profile = Annotated[Union[PlatformProfile, WebProfile], Field(discriminator="type")]


def make_profile(kind: ProfileKind | str, api_key: str | None = None) -> PlatformProfile | WebProfile:
    """Build a profile of the given kind."""
    kind = ProfileKind(kind)
    if kind is ProfileKind.PLATFORM:
        return PlatformProfile(api_key=api_key or None)
    return WebProfile()


class Configuration(BaseModel):
    """Profiles plus the active pointer, as stored on disk."""

    active: str | None = None
    profiles: dict[str, Profile] = Field(default_factory=dict)

    def sorted_names(self) -> list[str]:
        return sorted(self.profiles)

    def to_blob(self) -> dict[str, Any]:
        """Serialise using the persisted field names, omitting unset values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
