from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    store_backend: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "document_analytics"
    db_username: str = "postgres"
    db_password: str = "password"
    db_max_connections: int = Field(default=20, ge=1)

    source_provider: str = "opentext"
    opentext_base_url: str = "http://opentext-dms-server:8080"
    opentext_username: str = "admin"
    opentext_password: str = "password"
    opentext_page_size: int = Field(default=50, ge=1)
    opentext_timeout_seconds: int = 30

    ocr_provider: str = "ocr_space"
    ocr_endpoint: str = "https://api.ocr.space/parse/image"
    ocr_api_key: str = ""
    ocr_timeout_seconds: int = 60
    ocr_max_file_size_bytes: int = 10 * 1024 * 1024

    analysis_provider: str = "openai"
    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_model_name: str = "gpt-4"
    openai_max_tokens: int = 2000
    openai_temperature: float = 0.1
    openai_timeout_seconds: int = 30
    expiring_soon_days: int = Field(default=30, ge=0)

    processing_max_retries: int = Field(default=3, ge=1)
    processing_concurrency: int = Field(default=3, ge=1)

    sync_job_name: str = "document_sync"
    schedule_interval_seconds: int = Field(default=4 * 60 * 60, ge=1)
    schedule_enabled: bool = True
