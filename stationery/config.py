from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Stationery Business Manager"
    APP_VERSION: str = "2.0.0"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./stationery.db"
    DB_MAX_CONNECTIONS: int = 20
    DB_CONNECT_TIMEOUT_SECONDS: int = 2
    DB_BUSY_TIMEOUT_SECONDS: int = 30

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Business
    # ==============================
    # "local", "utc" or an IANA zone name such as "Africa/Nairobi".
    BUSINESS_TZ: str = "local"

    @field_validator("BUSINESS_TZ")
    @classmethod
    def _check_business_tz(cls, value: str) -> str:
        mode = (value or "local").strip()
        if mode.lower() in ("local", "utc"):
            return mode.lower()
        try:
            ZoneInfo(mode)
        except (ZoneInfoNotFoundError, OSError, ValueError) as exc:
            raise ValueError(f"Unknown BUSINESS_TZ: {mode}") from exc
        return mode


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
