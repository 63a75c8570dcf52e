import sys
from pathlib import Path
from typing import Callable, Iterable
from unittest.mock import MagicMock

import pytest

# Ensure project root is importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from codex_profiler import config as config_module  # noqa: E402
from codex_profiler.cli import CodexProfiler  # noqa: E402
from codex_profiler.config import Settings  # noqa: E402
from codex_profiler.core.dispatcher import Dispatcher  # noqa: E402
from codex_profiler.core.store import ProfileStore  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch) -> Iterable[None]:
    """Reset global settings and keep the environment out of the tests."""
    monkeypatch.delenv(config_module.SETTINGS_ENV_VAR, raising=False)
    monkeypatch.delenv(config_module.LOG_LEVEL_ENV_VAR, raising=False)
    config_module._settings = None  # type: ignore[attr-defined]
    yield
    config_module._settings = None  # type: ignore[attr-defined]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(config_dir=tmp_path / "profiler")


@pytest.fixture
def store(settings: Settings) -> ProfileStore:
    return ProfileStore(settings.config_path)


@pytest.fixture
def runner() -> MagicMock:
    """Stand-in for subprocess.run that reports success."""
    mock = MagicMock()
    mock.return_value.returncode = 0
    return mock


class ScriptedPrompt:
    """Replays canned answers and records the questions asked."""

    def __init__(self, answers: Iterable[str]) -> None:
        self.answers = list(answers)
        self.questions: list[tuple[str, bool]] = []

    async def __call__(self, message: str, *, secret: bool = False) -> str:
        self.questions.append((message, secret))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0).strip()


@pytest.fixture
def make_app(settings: Settings, store: ProfileStore, runner: MagicMock) -> Callable[..., CodexProfiler]:
    def _make(answers: Iterable[str] = (), *, platform: str = "linux") -> CodexProfiler:
        return CodexProfiler(
            settings,
            store=store,
            dispatcher=Dispatcher(settings, runner=runner, platform=platform),
            prompt=ScriptedPrompt(answers),
        )

    return _make

