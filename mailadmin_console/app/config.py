from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ConsoleConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MAILADMIN_", env_file=".env", extra="ignore")

    BASE_URL: str = DEFAULT_BASE_URL
    TIMEOUT_SECONDS: float = 30
    VERIFY_SSL: bool = True
    RETRY_MAX_ATTEMPTS: int = 3
    RETRY_BACKOFF_MS: int = 150
    SEARCH_DEBOUNCE_MS: int = 300
    PAGE_SIZE: int = 20

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "ConsoleConfig":
        config = cls(_env_file=env_file)
        config.validate()
        return config

    def validate(self) -> None:
        if not self.BASE_URL.strip():
            raise ValueError("MAILADMIN_BASE_URL must not be empty")
        if self.TIMEOUT_SECONDS <= 0:
            raise ValueError("MAILADMIN_TIMEOUT_SECONDS must be greater than 0")
        if self.RETRY_MAX_ATTEMPTS < 1:
            raise ValueError("MAILADMIN_RETRY_MAX_ATTEMPTS must be >= 1")
        if self.RETRY_BACKOFF_MS < 0:
            raise ValueError("MAILADMIN_RETRY_BACKOFF_MS must be >= 0")
        if self.SEARCH_DEBOUNCE_MS < 0:
            raise ValueError("MAILADMIN_SEARCH_DEBOUNCE_MS must be >= 0")
        if self.PAGE_SIZE < 1:
            raise ValueError("MAILADMIN_PAGE_SIZE must be >= 1")
