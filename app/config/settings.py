from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "insights"
    db_username: str = "insights"
    db_password: str = "secret"

    max_upload_bytes: int = 10 * 1024 * 1024

    summary_provider: str = "gemini"
    summary_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("summary_api_key", "gemini_api_key"),
    )
    summary_model_name: str = "gemini-2.5-flash"
    summary_base_url: str = ""
    summary_timeout_seconds: int = 30
    summary_temperature: float = 0.2
    summary_max_output_tokens: int = 1024
    summary_max_workers: int = 4

    stale_processing_seconds: int = 300
    sweep_interval_seconds: int = 30
