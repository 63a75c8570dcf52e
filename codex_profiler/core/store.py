"""
JSON-backed profile store.

The store tolerates partially corrupt state: malformed entries are dropped on
load, and an unreadable file is treated as an empty configuration.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from codex_profiler.core.profile import Configuration, PlatformProfile, WebProfile
from codex_profiler.exceptions import StorageWriteError

logger = logging.getLogger(__name__)

UNREADABLE_WARNING = "Unable to parse codex-profiler config. A new blank file will be created."


def sanitize_profiles(raw: Any) -> dict[str, PlatformProfile | WebProfile]:
    """Keep only well-formed profile entries.

    Entries that are not objects, or whose ``type`` is not ``platform`` or
    ``web``, are dropped. ``apiKey`` survives only as a non-empty string.
    """
    if not isinstance(raw, dict):
        return {}
    sanitized: dict[str, PlatformProfile | WebProfile] = {}
    for name, entry in raw.items():
        if not isinstance(name, str) or not name:
            continue
        if not isinstance(entry, dict):
            continue
        kind = entry.get("type")
        if kind == "platform":
            api_key = entry.get("apiKey")
            sanitized[name] = PlatformProfile(
                api_key=api_key if isinstance(api_key, str) and api_key else None
            )
        elif kind == "web":
            sanitized[name] = WebProfile()
        else:
            logger.debug("Dropping profile %r with unsupported type %r", name, kind)
    return sanitized


class ProfileStore:
    """Load and save the profile configuration blob."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()
        self.warnings: list[str] = []

    def load(self) -> Configuration:
        """Read the configuration, falling back to an empty one.

        A missing file is not an error. An unreadable one records a warning in
        ``self.warnings`` and yields an empty configuration.
        """
        if not self.path.exists():
            return Configuration()

        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Failed to read %s: %s", self.path, exc)
            self.warnings.append(UNREADABLE_WARNING)
            return Configuration()

        if not isinstance(parsed, dict):
            logger.warning("Ignoring %s: top-level value is not an object", self.path)
            self.warnings.append(UNREADABLE_WARNING)
            return Configuration()

        active = parsed.get("active")
        return Configuration(
            active=active if isinstance(active, str) else None,
            profiles=sanitize_profiles(parsed.get("profiles")),
        )

    def save(self, configuration: Configuration) -> None:
        """Overwrite the blob with a full snapshot of ``configuration``.

        Raises:
            StorageWriteError: If the directory or file cannot be written.
        """
        payload = json.dumps(configuration.to_blob(), indent=2)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise StorageWriteError(f"Unable to write {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
        logger.debug("Saved %d profile(s) to %s", len(configuration.profiles), self.path)
