from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

_PKG_DIR = Path(__file__).resolve().parent

@dataclass(frozen=True)
class Settings:
    DB_PATH: Path = _PKG_DIR.parent / "eunoia.db"
    DATA_DIR: Path = _PKG_DIR.parent / "word_data"
    ASSET_DIR: Path = _PKG_DIR / "assets"
    HISTORY_LIMIT: int = 1000
    TODAY_WORDS_PER_CATEGORY: int = 5
    QUIZ_BATCH_SIZE: int = 30
    DAILY_FETCH_HOUR: int = 9
    DAILY_FETCH_MINUTE: int = 0
    GEMINI_MODELS: tuple[str, ...] = field(default=("gemini-2.0-flash", "gemini-1.5-flash", "gemini-1.5-pro"))
    ENABLE_SCHEDULER: bool = True
    LOG_LEVEL: str = "INFO"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Defaults, with optional EUNOIA_* environment overrides."""
    overrides: dict = {}
    if os.environ.get("EUNOIA_DB_PATH"):
        overrides["DB_PATH"] = Path(os.environ["EUNOIA_DB_PATH"])
    if os.environ.get("EUNOIA_DATA_DIR"):
        overrides["DATA_DIR"] = Path(os.environ["EUNOIA_DATA_DIR"])
    if os.environ.get("EUNOIA_ENABLE_SCHEDULER"):
        overrides["ENABLE_SCHEDULER"] = _env_flag(os.environ["EUNOIA_ENABLE_SCHEDULER"])
    if os.environ.get("EUNOIA_LOG_LEVEL"):
        overrides["LOG_LEVEL"] = os.environ["EUNOIA_LOG_LEVEL"].upper()
    return Settings(**overrides)

settings = load_settings()
