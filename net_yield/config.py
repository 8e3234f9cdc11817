"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NET_YIELD_",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./net_yield.db"
    database_echo: bool = False
    create_tables_on_startup: bool = True

    # Service
    service_name: str = "net-yield-simulator"
    log_level: str = "INFO"

    # Admin listing
    listing_max_limit: int = 500


settings = Settings()
