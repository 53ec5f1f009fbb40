"""
BidWriter Configuration
Central configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ===== Application =====
    app_name: str = "BidWriter"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # ===== CORS Configuration =====
    # Comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    cors_allow_credentials: bool = True

    # ===== Database =====
    database_url: str = "sqlite+aiosqlite:///./bidwriter.db"

    # ===== Funder Definitions =====
    funders_dir: Path = PACKAGE_DIR / "data" / "funders"

    # ===== AI API Keys =====
    anthropic_api_key: Optional[str] = None

    # ===== LLM Config =====
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 8192

    # ===== Literature Search =====
    semantic_scholar_api_url: str = "https://api.semanticscholar.org/graph/v1"
    semantic_scholar_timeout: float = 30.0

    @property
    def cors_origin_list(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
