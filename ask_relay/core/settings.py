from __future__ import annotations

from dataclasses import dataclass
from os import getcwd, getenv
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_CONTEXT_CHARS = 14000
DEFAULT_PORT = 8000


class SettingsError(ValueError):
    """Raised when the process environment cannot produce valid settings."""


def _int_env(name: str, default: int) -> int:
    raw = getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str) -> Optional[float]:
    raw = getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise SettingsError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise SettingsError(f"{name} must be positive, got {raw!r}")
    return value


# How to use:
# Build once with Settings.from_env() at startup and hand the instance to
# create_app() / RelayService, e.g. settings.GEMINI_API_KEY
@dataclass(frozen=True)
class Settings:
    GEMINI_API_KEY: str
    KNOWLEDGE_DIR: Path
    PORT: int = DEFAULT_PORT
    HOST: str = "0.0.0.0"
    MAX_CONTEXT_CHARS: int = DEFAULT_MAX_CONTEXT_CHARS
    GEMINI_MODEL: str = DEFAULT_GEMINI_MODEL
    GEMINI_API_BASE: str = DEFAULT_GEMINI_API_BASE
    # None keeps the transport default: no timeout at all.
    GEMINI_TIMEOUT_SECONDS: Optional[float] = None
    LOG_LEVEL: str = "INFO"

    PROJECT_NAME: str = "Knowledge Ask Relay"
    VERSION: str = "0.1.0"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))

        api_key = (getenv("GEMINI_API_KEY") or "").strip()
        if not api_key:
            raise SettingsError(
                "GEMINI_API_KEY is missing. Set it in the environment or in .env."
            )

        knowledge_dir = getenv("KNOWLEDGE_DIR") or str(Path(getcwd()) / "knowledge_json")

        return cls(
            GEMINI_API_KEY=api_key,
            KNOWLEDGE_DIR=Path(knowledge_dir),
            PORT=_int_env("PORT", DEFAULT_PORT),
            HOST=getenv("HOST", "0.0.0.0"),
            MAX_CONTEXT_CHARS=_int_env("MAX_CONTEXT_CHARS", DEFAULT_MAX_CONTEXT_CHARS),
            GEMINI_MODEL=getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            GEMINI_API_BASE=getenv("GEMINI_API_BASE", DEFAULT_GEMINI_API_BASE),
            GEMINI_TIMEOUT_SECONDS=_float_env("GEMINI_TIMEOUT_SECONDS"),
            LOG_LEVEL=getenv("LOG_LEVEL", "INFO").upper(),
        )
