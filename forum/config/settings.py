"""
Configuration settings for the forum question feeds.
Loads environment variables and provides application settings.
"""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# settings.py is at forum/config/settings.py → 3 levels up
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database - use absolute path to avoid working directory issues
    database_url: str = f"sqlite:///{_PROJECT_ROOT}/data/forum.db"
    database_echo: bool = False  # Set to True for SQL query logging

    # Feed page sizes
    page_size: int = 35  # home, unsolved, unanswered and per-author feeds
    tag_page_size: int = 50  # per-tag feed
    related_count: int = 5  # "related questions" box

    # Moderation
    spam_boundary: int = -5  # questions scored below this are hidden from non-moderators

    # Syndication
    syndication_max_results: int = 20  # default RSS item count


# Global settings instance
settings = Settings()
