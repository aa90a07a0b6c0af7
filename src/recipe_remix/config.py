import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MEALDB_BASE_URL = "https://www.themealdb.com/api/json/v1/1"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_REMIX_MODEL = "gpt-4.1"
DEFAULT_REMIX_MAX_TOKENS = 400
DEFAULT_FAVORITES_PATH = Path.home() / ".recipe_remix" / "favorites.json"


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    mealdb_base_url: str = DEFAULT_MEALDB_BASE_URL
    openai_api_key: Optional[str] = None
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    remix_model: str = DEFAULT_REMIX_MODEL
    remix_max_tokens: int = DEFAULT_REMIX_MAX_TOKENS
    favorites_path: Path = DEFAULT_FAVORITES_PATH
    http_timeout: Optional[float] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from the process environment (and .env when present)."""
        if dotenv:
            load_dotenv()

        return cls(
            mealdb_base_url=os.getenv("MEALDB_BASE_URL", DEFAULT_MEALDB_BASE_URL).rstrip("/"),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL).rstrip("/"),
            remix_model=os.getenv("REMIX_MODEL", DEFAULT_REMIX_MODEL),
            remix_max_tokens=int(os.getenv("REMIX_MAX_TOKENS", str(DEFAULT_REMIX_MAX_TOKENS))),
            favorites_path=Path(os.getenv("FAVORITES_PATH", str(DEFAULT_FAVORITES_PATH))).expanduser(),
            http_timeout=_optional_float(os.getenv("HTTP_TIMEOUT")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE") or None,
        )
