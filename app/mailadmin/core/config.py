from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "MAIL-RELAY-ADMIN"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite+pysqlite:///./mailadmin.db"
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "change-me-please"
    LIST_MAX_PAGE_SIZE: int = 500
    PASSWORD_MIN_LENGTH: int = 12
    PASSWORD_MAX_LENGTH: int = 1024


settings = Settings()
