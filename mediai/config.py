import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_base_url: str = "https://ai-doc-ser.vercel.app/api"
    api_token: str | None = None
    request_timeout_seconds: int = 120
    upload_timeout_seconds: int = 600
    cache_ttl_seconds: int = 60
    max_upload_size_mb: int = 20


settings = Settings()


def configure_logging() -> None:
    """Apply ``settings.log_level`` to the root logger; later calls are no-ops."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
