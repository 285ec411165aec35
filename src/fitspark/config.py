"""Application configuration.

Settings are read from the environment (prefix ``FITSPARK_``) and an
optional ``.env`` file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (repository root / data)
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Runtime settings for the API, CLI and services."""

    model_config = SettingsConfigDict(
        env_prefix="FITSPARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=DEFAULT_DATA_DIR, description="Directory holding the SQLite database")

    # Auth
    secret_key: str = Field(default="dev-secret-key-change-me", description="Token signing key")
    token_algorithm: str = "HS256"
    token_expire_minutes: int = Field(default=60 * 24 * 7, ge=1)

    # Coach (OpenAI)
    openai_api_key: str = Field(default="", description="API key for the OpenAI client")
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o"
    program_max_tokens: int = Field(default=4000, ge=100)

    # Web
    cors_origins: list[str] = Field(default_factory=list, description="Origins allowed to call the API")

    # Program and goals
    program_days: int = Field(default=30, ge=1)
    weekly_goal_days: int = Field(default=5, ge=1, le=7)
    weekly_goal_minutes_per_day: int = Field(default=35, ge=1)
    consistency_window: int = Field(default=5, ge=1)

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None

    @property
    def db_path(self) -> Path:
        """Path of the SQLite database file."""
        return self.data_dir / "fitspark.db"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
