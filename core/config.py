from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Flashcards API"
    LOG_LEVEL: str = "INFO"

    STORAGE_BACKEND: Literal["memory", "database"] = "memory"
    DATABASE_URL: str = "sqlite:///flashcards.db"
    REDIS_URL: str | None = None
    SESSION_CACHE_TTL_SECONDS: int = 300
    RATE_LIMIT_CACHE_TTL_SECONDS: int = 60

    DEFAULT_GENERATION_LIMIT: int = 20
    RATE_LIMIT_WINDOW_HOURS: int = 24
    RATE_LIMIT_CLEANUP_INTERVAL_SECONDS: int = 3600

    GENERATOR_URL: str | None = None
    GENERATOR_API_KEY: str | None = None
    GENERATOR_TIMEOUT_SECONDS: float = 60.0

    CORS_ORIGINS: str = "http://localhost:8080,http://localhost:3000"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def rate_limit_window_ms(self) -> int:
        return self.RATE_LIMIT_WINDOW_HOURS * 60 * 60 * 1000


settings = Settings()
