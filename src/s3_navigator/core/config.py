"""Configuration management for s3-navigator."""

from pydantic import field_validator
from pydantic_settings import BaseSettings

PAGE_SIZES = (10, 25, 50, 100)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "s3-navigator"

    default_page_size: int = 10
    default_region: str = "us-east-1"
    bucket_store_path: str = "~/.s3-navigator/buckets.json"

    model_config = {
        "env_prefix": "S3_NAVIGATOR_",
        "case_sensitive": False,
    }

    @field_validator("default_page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZES:
            raise ValueError(f"default_page_size must be one of {PAGE_SIZES}")
        return value


settings = Settings()
