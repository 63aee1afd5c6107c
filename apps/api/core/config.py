"""Centralized application configuration via Pydantic Settings.

Loads all env vars into a typed Settings instance. The database lives in a
fixed application-data directory which is created on first use.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    APP_DATA_DIR: str = Field(
        default=str(Path.home() / ".statement-ledger"),
        description="Directory holding the ledger database",
    )
    DATABASE_FILENAME: str = Field(default="finance.db", description="SQLite file name")
    DB_POOL_SIZE: int = Field(default=5, ge=1, description="Connection pool size")

    # Security
    PASSWORD_HASH_METHOD: str = Field(
        default="scrypt",
        description="werkzeug password hash method, e.g. scrypt or pbkdf2:sha256",
    )

    # Ingestion
    CSV_HAS_HEADER: bool = Field(
        default=True,
        description="Treat the first CSV record as a header row",
    )

    # CORS
    ALLOWED_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Comma-separated allowed origins for CORS",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # App
    APP_VERSION: str = Field(default="0.1.0", description="Application version")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    @property
    def database_path(self) -> Path:
        return Path(self.APP_DATA_DIR).expanduser() / self.DATABASE_FILENAME

    def ensure_data_dir(self) -> Path:
        path = Path(self.APP_DATA_DIR).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    model_config = {"env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Factory for Settings — allows test override."""
    return Settings()


settings = get_settings()
