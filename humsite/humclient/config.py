import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

LANGUAGES = ('vi', 'en')


@dataclass(frozen=True)
class ClientSettings:
    api_base: str
    language: str
    state_file: str | None


def get_settings() -> ClientSettings:
    language = (os.getenv("HUM_LANGUAGE") or "vi").strip().lower()
    if language not in LANGUAGES:
        language = "vi"
    return ClientSettings(
        api_base=(os.getenv("HUM_API_BASE") or "http://127.0.0.1:8000").rstrip("/"),
        language=language,
        state_file=os.getenv("HUM_STATE_FILE") or None,
    )
