"""
codex-profiler - switch between codex API-key profiles and ChatGPT.

Stores named profiles in ~/.codex-profiler/config.json and runs the codex CLI
with the active profile's API key, or opens ChatGPT for web profiles.
"""

__version__ = "0.1.0"

from codex_profiler.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
