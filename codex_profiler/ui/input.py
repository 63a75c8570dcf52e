"""
Input handling for codex-profiler.
"""

import asyncio

from prompt_toolkit import PromptSession
from prompt_toolkit.styles import Style


# Define prompt style
PROMPT_STYLE = Style.from_dict({
    "prompt": "cyan bold",
    "": "",  # Default text
})

# Global session (lazy initialized)
_session: PromptSession | None = None


def _get_session() -> PromptSession:
    """Get or create prompt session.

    No history file is kept: prompts may receive API keys.
    """
    global _session
    if _session is None:
        _session = PromptSession(style=PROMPT_STYLE, multiline=False)
    return _session


async def get_user_input(prompt: str, *, secret: bool = False) -> str:
    """Ask the user for one line of text.

    Args:
        prompt: Prompt string to display.
        secret: Whether to hide the typed characters.

    Returns:
        The answer with surrounding whitespace removed.
    """
    session = _get_session()

    # Run prompt_toolkit in thread pool since it's blocking
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(
        None,
        lambda: session.prompt([("class:prompt", prompt)], is_password=secret),
    )
    return result.strip()
