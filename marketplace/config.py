"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Core logic never reads Settings; values are passed in at startup

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from marketplace.core.credentials import AUTH_TOKEN_BYTES, SALT_BYTES


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://marketplace:marketplace@db:5432/marketplace"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Cloudinary (image hosting)
    cloudinary_cloud_name: str = "demo"
    cloudinary_api_key: str = "placeholder"
    cloudinary_api_secret: str = "placeholder"
    cloudinary_folder: str | None = "vinted/offers"
    cloudinary_base_url: str = "https://api.cloudinary.com/v1_1"
    upload_timeout_seconds: float = 30.0

    # Credentials
    salt_bytes: int = SALT_BYTES
    token_bytes: int = AUTH_TOKEN_BYTES

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
