import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- Remote: movies-info-service ---
    # Базовый URL ресурса, запрос уходит на <MOVIES_INFO_URL>/{id}
    MOVIES_INFO_URL: str = "http://localhost:8080/v1/movieinfos"

    # --- HTTP Client Configuration ---
    # Таймауты на ОДНУ попытку, независимо от бюджета ретраев.
    HTTP_TIMEOUT_CONNECT: float = 5.0
    HTTP_TIMEOUT_READ: float = 10.0
    HTTP_TIMEOUT_WRITE: float = 5.0
    HTTP_TIMEOUT_POOL: float = 5.0
    HTTP_FOLLOW_REDIRECTS: bool = True

    # --- Retry Policy Configuration ---
    # Общее число попыток (первая + повторы).
    RETRY_MAX_ATTEMPTS: int = Field(default=3, ge=1)
    # Фиксированная пауза между попытками, сек. Экспоненты нет: сервис внутренний.
    RETRY_DELAY: float = Field(default=1.0, ge=0.0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = None) -> None:
    """Базовая настройка логов для скриптов и локального запуска."""
    level = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx пишет каждый запрос на INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
