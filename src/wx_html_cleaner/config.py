"""Centralized configuration loaded from .env."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


def _load_env() -> None:
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Tree builder tried first; bs4's html.parser is always tried after it
    parser: str = "lxml"

    # Output naming
    output_dir: str = ""  # empty = next to the source file
    suffix: str = "_clean.html"
    title_max_length: int = 20

    # URL sources
    fetch_timeout: int = 30
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> Settings:
        _load_env()
        return cls(
            parser=os.getenv("CLEANER_PARSER", "lxml"),
            output_dir=os.getenv("CLEANER_OUTPUT_DIR", ""),
            suffix=os.getenv("CLEANER_SUFFIX", "_clean.html"),
            title_max_length=_int_env("CLEANER_TITLE_MAX_LENGTH", 20),
            fetch_timeout=_int_env("FETCH_TIMEOUT", 30),
            user_agent=os.getenv("FETCH_USER_AGENT", DEFAULT_USER_AGENT),
        )
