"""
Configuration management for Creator Analytics.

This module handles all engine settings using Pydantic Settings
for type validation and environment variable management.
"""

from pydantic import validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings with environment variable support."""

    # Project Information
    PROJECT_NAME: str = "Creator Analytics"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    @validator("LOG_LEVEL", pre=True, always=True)
    def normalize_log_level(cls, v):
        """Accept lower-case level names from the environment."""
        if v is None or v == "":
            return "INFO"
        level = str(v).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {v}")
        return level

    # Database Configuration
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "creator_analytics"

    # Collections read by the repositories
    CONTENT_COLLECTION: str = "content_items"
    PERFORMANCE_COLLECTION: str = "content_performance"
    CREATOR_COLLECTION: str = "creators"
    FOLLOWER_COLLECTION: str = "follower_metrics"

    # Analysis defaults
    DEFAULT_TOP_POSTS_COUNT: int = 20
    MAX_TOP_POSTS_COUNT: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
