from __future__ import annotations

from typing import Callable
from unittest.mock import MagicMock

import pytest

from codex_profiler.cli import CodexProfiler
from codex_profiler.commands import get_command
from codex_profiler.commands.add import AddCommand
from codex_profiler.commands.help import HelpCommand
from codex_profiler.core.profile import PlatformProfile, WebProfile
from codex_profiler.core.store import ProfileStore
from codex_profiler.exceptions import StorageWriteError
from tests.helpers.blobs import read_blob, write_blob

AppFactory = Callable[..., CodexProfiler]


def test_get_command_is_case_insensitive() -> None:
    assert isinstance(get_command("ADD"), AddCommand)
    assert isinstance(get_command("--help"), HelpCommand)
    assert get_command("delete") is None


@pytest.mark.anyio
async def test_no_verb_prints_usage(make_app: AppFactory, capsys: pytest.CaptureFixture[str]) -> None:
    app = make_app()

    assert await app.handle([]) == 0
    assert "Usage:" in capsys.readouterr().out


@pytest.mark.anyio
async def test_unknown_verb_prints_usage_and_fails(
    make_app: AppFactory, capsys: pytest.CaptureFixture[str]
) -> None:
    app = make_app()

    assert await app.handle(["Frobnicate"]) == 1
    captured = capsys.readouterr()
    assert "Unknown command 'frobnicate'." in captured.err
    assert "Usage:" in captured.out


@pytest.mark.anyio
async def test_add_first_profile_becomes_active(
    make_app: AppFactory, store: ProfileStore, capsys: pytest.CaptureFixture[str]
) -> None:
    app = make_app(["web"])

    assert await app.handle(["add", "chat"]) == 0

    assert read_blob(store.path) == {"active": "chat", "profiles": {"chat": {"type": "web"}}}
    assert "Profile 'chat' saved (active)." in capsys.readouterr().out


@pytest.mark.anyio
async def test_add_keeps_existing_active(
    make_app: AppFactory, store: ProfileStore, capsys: pytest.CaptureFixture[str]
) -> None:
    write_blob(store.path, {"active": "chat", "profiles": {"chat": {"type": "web"}}})
    app = make_app(["platform", "sk-work"])

    assert await app.handle(["add", "work"]) == 0

    assert app.configuration.active == "chat"
    assert app.configuration.profiles["work"] == PlatformProfile(api_key="sk-work")
    assert read_blob(store.path)["active"] == "chat"
    out = capsys.readouterr().out
    assert "Profile 'work' saved." in out
    assert "(active)" not in out


@pytest.mark.anyio
async def test_add_reprompts_until_valid_answers(make_app: AppFactory, capsys: pytest.CaptureFixture[str]) -> None:
    app = make_app(["azure", "", "PLATFORM", "", "   ", "sk-test"])

    assert await app.handle(["add", "  work  "]) == 0

    assert app.configuration.profiles == {"work": PlatformProfile(api_key="sk-test")}
    questions = app._prompt.questions  # type: ignore[attr-defined]
    assert [q for q, _ in questions].count("Profile type (platform/web): ") == 3
    assert [q for q, _ in questions].count("OpenAI API key: ") == 3
    assert all(secret for q, secret in questions if q == "OpenAI API key: ")
    out = capsys.readouterr().out
    assert "Please enter either 'platform' or 'web'." in out
    assert "The API key cannot be empty." in out


@pytest.mark.anyio
async def test_add_web_does_not_ask_for_key(make_app: AppFactory) -> None:
    app = make_app(["web"])

    await app.handle(["add", "chat"])

    assert [q for q, _ in app._prompt.questions] == ["Profile type (platform/web): "]  # type: ignore[attr-defined]


@pytest.mark.anyio
async def test_add_replaces_existing_profile(make_app: AppFactory, store: ProfileStore) -> None:
    write_blob(store.path, {"active": "work", "profiles": {"work": {"type": "platform", "apiKey": "sk-old"}}})
    app = make_app(["web"])

    await app.handle(["add", "work"])

    assert ProfileStore(store.path).load().profiles == {"work": WebProfile()}


@pytest.mark.anyio
@pytest.mark.parametrize("verb", ["add", "use"])
async def test_missing_name_fails_without_writing(
    verb: str, make_app: AppFactory, store: ProfileStore, capsys: pytest.CaptureFixture[str]
) -> None:
    app = make_app()

    assert await app.handle([verb, "  "]) == 1

    assert not store.path.exists()
    assert f"codex-profiler {verb} enterprise" in capsys.readouterr().err


@pytest.mark.anyio
async def test_use_switches_active(make_app: AppFactory, store: ProfileStore) -> None:
    write_blob(store.path, {"active": "chat", "profiles": {"chat": {"type": "web"}, "work": {"type": "platform"}}})
    app = make_app()

    assert await app.handle(["use", "work"]) == 0

    assert read_blob(store.path)["active"] == "work"


@pytest.mark.anyio
async def test_use_unknown_profile_leaves_active(
    make_app: AppFactory, store: ProfileStore, capsys: pytest.CaptureFixture[str]
) -> None:
    write_blob(store.path, {"active": "chat", "profiles": {"chat": {"type": "web"}}})
    before = store.path.read_text(encoding="utf-8")
    app = make_app()

    assert await app.handle(["use", "missing"]) == 1

    assert app.configuration.active == "chat"
    assert store.path.read_text(encoding="utf-8") == before
    assert "Profile 'missing' does not exist" in capsys.readouterr().err


@pytest.mark.anyio
async def test_list_sorts_and_marks_active(
    make_app: AppFactory, store: ProfileStore, capsys: pytest.CaptureFixture[str]
) -> None:
    write_blob(
        store.path,
        {
            "active": "beta",
            "profiles": {
                "zeta": {"type": "web"},
                "alpha": {"type": "platform", "apiKey": "sk-a"},
                "beta": {"type": "platform", "apiKey": "sk-b"},
            },
        },
    )
    app = make_app()

    assert await app.handle(["list"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Profiles",
        "  alpha (platform)",
        "→ beta (platform)",
        "  zeta (web)",
    ]


@pytest.mark.anyio
async def test_list_without_profiles_prints_hint(make_app: AppFactory, capsys: pytest.CaptureFixture[str]) -> None:
    app = make_app()

    assert await app.handle(["list"]) == 0
    assert "No profiles configured." in capsys.readouterr().out


@pytest.mark.anyio
async def test_run_without_active_profile(make_app: AppFactory, runner: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
    app = make_app()

    assert await app.handle(["run"]) == 1

    assert "No active profile." in capsys.readouterr().err
    runner.assert_not_called()


@pytest.mark.anyio
async def test_run_with_dangling_active_profile(
    make_app: AppFactory, store: ProfileStore, runner: MagicMock, capsys: pytest.CaptureFixture[str]
) -> None:
    write_blob(store.path, {"active": "gone", "profiles": {"chat": {"type": "web"}}})
    app = make_app()

    assert await app.handle(["run"]) == 1

    err = capsys.readouterr().err
    assert "The active profile 'gone' is missing." in err
    assert "No active profile." not in err
    runner.assert_not_called()


@pytest.mark.anyio
async def test_run_platform_passes_trailing_args(
    make_app: AppFactory, store: ProfileStore, runner: MagicMock
) -> None:
    write_blob(store.path, {"active": "work", "profiles": {"work": {"type": "platform", "apiKey": "sk-test"}}})
    before = store.path.read_text(encoding="utf-8")
    app = make_app()

    assert await app.handle(["run", "--flag", "a value"]) == 0

    assert runner.call_args.args[0] == ["codex", "--flag", "a value"]
    assert runner.call_args.kwargs["env"]["CODEX_API_KEY"] == "sk-test"
    assert store.path.read_text(encoding="utf-8") == before


@pytest.mark.anyio
async def test_run_platform_without_key(
    make_app: AppFactory, store: ProfileStore, runner: MagicMock, capsys: pytest.CaptureFixture[str]
) -> None:
    write_blob(store.path, {"active": "work", "profiles": {"work": {"type": "platform"}}})
    app = make_app()

    assert await app.handle(["run"]) == 1

    assert "does not have an API key" in capsys.readouterr().err
    runner.assert_not_called()


@pytest.mark.anyio
async def test_run_propagates_child_exit_code(make_app: AppFactory, store: ProfileStore, runner: MagicMock) -> None:
    write_blob(store.path, {"active": "work", "profiles": {"work": {"type": "platform", "apiKey": "sk-test"}}})
    runner.return_value.returncode = 2
    app = make_app()

    assert await app.handle(["run"]) == 2


@pytest.mark.anyio
async def test_run_web_never_touches_store(
    make_app: AppFactory, store: ProfileStore, runner: MagicMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_blob(store.path, {"active": "chat", "profiles": {"chat": {"type": "web"}}})
    app = make_app(platform="darwin")
    save = MagicMock()
    monkeypatch.setattr(app.store, "save", save)

    assert await app.handle(["run", "ignored"]) == 0

    save.assert_not_called()
    assert runner.call_args.args[0] == ["open", "https://chat.openai.com"]


@pytest.mark.anyio
async def test_run_web_browser_failure_is_a_warning(
    make_app: AppFactory, store: ProfileStore, runner: MagicMock, capsys: pytest.CaptureFixture[str]
) -> None:
    write_blob(store.path, {"active": "chat", "profiles": {"chat": {"type": "web"}}})
    runner.side_effect = FileNotFoundError("launcher")
    app = make_app()

    assert await app.handle(["run"]) == 1

    captured = capsys.readouterr()
    assert "Opening ChatGPT Plus in your browser..." in captured.out
    assert "Please visit https://chat.openai.com." in captured.err
    assert "Error:" not in captured.err


@pytest.mark.anyio
async def test_storage_failure_is_reported(
    make_app: AppFactory, store: ProfileStore, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    app = make_app(["web"])

    def _fail(configuration: object) -> None:
        raise StorageWriteError("Unable to write config.json: read-only file system")

    monkeypatch.setattr(app.store, "save", _fail)

    assert await app.handle(["add", "chat"]) == 1

    assert app.configuration.profiles == {}
    assert "read-only file system" in capsys.readouterr().err


@pytest.mark.anyio
async def test_corrupt_store_warns_and_continues(
    make_app: AppFactory, store: ProfileStore, capsys: pytest.CaptureFixture[str]
) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text("[broken", encoding="utf-8")
    app = make_app(["web"])

    assert await app.handle(["add", "chat"]) == 0

    assert "Unable to parse codex-profiler config." in capsys.readouterr().err
    assert read_blob(store.path) == {"active": "chat", "profiles": {"chat": {"type": "web"}}}
