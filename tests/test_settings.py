from pathlib import Path

import pytest

from ask_relay.core.settings import Settings, SettingsError
from ask_relay import main as relay_main

ENV_VARS = (
    "GEMINI_API_KEY",
    "PORT",
    "HOST",
    "KNOWLEDGE_DIR",
    "MAX_CONTEXT_CHARS",
    "GEMINI_MODEL",
    "GEMINI_API_BASE",
    "GEMINI_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Run from an empty directory so no stray .env is picked up.
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_api_key_fails(monkeypatch):
    with pytest.raises(SettingsError, match="GEMINI_API_KEY"):
        Settings.from_env()


def test_blank_api_key_fails(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    with pytest.raises(SettingsError):
        Settings.from_env()


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    settings = Settings.from_env()
    assert settings.GEMINI_API_KEY == "abc"
    assert settings.PORT == 8000
    assert settings.MAX_CONTEXT_CHARS == 14000
    assert settings.KNOWLEDGE_DIR == Path(tmp_path) / "knowledge_json"
    assert settings.GEMINI_MODEL == "gemini-2.5-flash"
    assert settings.GEMINI_TIMEOUT_SECONDS is None


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("GEMINI_API_KEY=from-dotenv\nPORT=9001\n", encoding="utf-8")
    settings = Settings.from_env()
    assert settings.GEMINI_API_KEY == "from-dotenv"
    assert settings.PORT == 9001


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("KNOWLEDGE_DIR", str(tmp_path / "kb"))
    monkeypatch.setenv("MAX_CONTEXT_CHARS", "100")
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.PORT == 9000
    assert settings.KNOWLEDGE_DIR == tmp_path / "kb"
    assert settings.MAX_CONTEXT_CHARS == 100
    assert settings.GEMINI_TIMEOUT_SECONDS == 30.0
    assert settings.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "name,value",
    [("PORT", "eighty"), ("MAX_CONTEXT_CHARS", "1.5"), ("GEMINI_TIMEOUT_SECONDS", "soon"),
     ("GEMINI_TIMEOUT_SECONDS", "0")],
)
def test_bad_values_fail(monkeypatch, name, value):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv(name, value)
    with pytest.raises(SettingsError, match=name):
        Settings.from_env()


def test_run_exits_with_message_without_api_key():
    with pytest.raises(SystemExit) as excinfo:
        relay_main.run()
    assert "GEMINI_API_KEY" in str(excinfo.value)


def test_create_app_without_settings_fails_fast():
    with pytest.raises(SettingsError):
        relay_main.create_app()
