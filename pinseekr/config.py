import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATABASE_URL = "sqlite:///./pinseekr.db"
DEFAULT_CUP_NAME = "Pinseekr Cup"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_json: bool = False
    cup_name: str = DEFAULT_CUP_NAME


def _normalize_database_url(value: str | None) -> str:
    if not value:
        return DEFAULT_DATABASE_URL
    normalized = value.strip()
    if "://" in normalized:
        return normalized
    if Path(normalized).suffix:  # bare path to a sqlite file
        return f"sqlite:///{normalized}"
    return normalized


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    return Settings(
        database_url=_normalize_database_url(os.getenv("DATABASE_URL")),
        log_level=os.getenv("PINSEEKR_LOG_LEVEL", "INFO").upper(),
        log_json=_flag(os.getenv("PINSEEKR_LOG_JSON")),
        cup_name=os.getenv("PINSEEKR_CUP_NAME", DEFAULT_CUP_NAME),
    )
