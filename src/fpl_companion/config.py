"""
Configuration management for FPL Companion using pydantic-settings.

Environment variables are loaded from .env file and validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FPLSettings(BaseSettings):
    """Statistics API settings."""

    base_url: str = Field(
        default="https://fantasy.premierleague.com/api",
        description="Base URL of the FPL API",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    user_agent: str = Field(default="FPL-Assistant/1.0", description="User-Agent header")
    default_league_id: int = Field(
        default=314, description="League searched when none is given (overall league)"
    )
    max_search_pages: int = Field(
        default=10, ge=1, le=50, description="Standings pages scanned per team search"
    )
    manager_id: int = Field(default=0, description="Your FPL team/manager ID")

    model_config = SettingsConfigDict(env_prefix="FPL_")


class LLMSettings(BaseSettings):
    """LLM provider settings (any OpenAI-compatible endpoint)."""

    api_key: SecretStr = Field(default=SecretStr(""), description="Provider API key")
    base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="OpenAI-compatible chat completions endpoint",
    )
    model: str = Field(default="llama-3.3-70b-versatile", description="Chat model name")
    temperature: float = Field(default=0.7, ge=0, le=2)

    # Feature toggle
    enabled: bool = Field(default=True, description="Enable/disable LLM features")

    model_config = SettingsConfigDict(env_prefix="LLM_")

    @property
    def has_api_key(self) -> bool:
        """Check if an API key is configured."""
        return bool(self.api_key.get_secret_value())


class CacheSettings(BaseSettings):
    """In-memory fetch cache configuration."""

    ttl: int = Field(default=300, ge=0, description="Cache TTL in seconds (5 minutes)")

    model_config = SettingsConfigDict(env_prefix="CACHE_")


class SquadSettings(BaseSettings):
    """Squad persistence and budget settings."""

    db_path: Path = Field(default=Path("data/squad.db"), description="Squad database path")
    budget_ceiling: int = Field(
        default=1000, ge=0, description="Squad budget ceiling in tenths (£100.0m)"
    )

    model_config = SettingsConfigDict(env_prefix="SQUAD_")

    @field_validator("db_path", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Convert string to Path."""
        return Path(v)


class AppSettings(BaseSettings):
    """General application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    host: str = Field(default="127.0.0.1", description="HTTP server bind address")
    port: int = Field(default=8000, description="HTTP server port")

    model_config = SettingsConfigDict(env_prefix="")


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    fpl: FPLSettings = Field(default_factory=FPLSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    squad: SquadSettings = Field(default_factory=SquadSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    def validate_llm_config(self) -> bool:
        """Check if LLM is properly configured."""
        if not self.llm.enabled:
            return True  # LLM disabled, no validation needed
        return self.llm.has_api_key


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.
    """
    from dotenv import load_dotenv

    env_paths = [
        Path(".env"),
        Path(__file__).parent.parent.parent / ".env",  # project root
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=True)
            break

    return Settings()
