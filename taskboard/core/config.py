"""Configuration management for taskboard."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    sqlite_db_path: str = Field(default="./data/taskboard.db", description="Path to the SQLite database file")

    # Server Configuration
    host: str = Field(default="127.0.0.1", description="Bind address for the API server")
    port: int = Field(default=8000, description="Port for the API server")
    environment: str = Field(default="development", description="Deployment environment name")
    cors_allow_origins: list[str] = Field(
        default=["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )

    # Client Configuration
    api_base_url: str = Field(default="http://127.0.0.1:8000", description="Base URL used by the board client")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production."""
        return self.environment.lower() == "production"


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 10

    # Task Validation
    TITLE_MIN_LENGTH: int = 1
    TITLE_MAX_LENGTH: int = 255

    # Paths
    TEMPLATES_DIR: Path = Path(__file__).parent.parent / "templates"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
