"""Environment configuration using Pydantic Settings"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connection and runtime settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Backend
    api_base_url: str = "http://localhost:8888"
    http_timeout_seconds: float = 10.0

    # Paging
    categories_page_size: int = 10
    transactions_page_size: int = 100

    # Client state
    config_dir: Path = Path.home() / ".expense-calendar"

    # Logging
    log_level: str = "INFO"


settings = Settings()
