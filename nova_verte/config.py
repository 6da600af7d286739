"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Key-value store for simulator state
    database_url: str = "sqlite:///./nova_verte.db"
    state_key: str = "calculatorData"

    # Service
    service_name: str = "nova-verte-simulator"
    log_level: str = "INFO"

    # Sessions
    session_header: str = "X-Session-ID"
    default_session_id: str = "default"


settings = Settings()
