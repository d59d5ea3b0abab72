from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the application."""

    APP_NAME: str = "cltodo"
    DEBUG: bool = False
    # Directory created under the project root (or the home directory)
    STORE_DIR: str = ".cltodo"
    DB_FILENAME: str = "data.db"
    # Explicit SQLAlchemy URL. When set, store resolution is skipped entirely.
    DATABASE_URL: str | None = None
    POOL_SIZE: int = 5
    VCS_MARKERS: list[str] = [".git", ".hg", ".svn"]

    model_config = SettingsConfigDict(
        env_prefix="CLTODO_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
