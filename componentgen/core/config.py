"""
Configuration module - centralized settings for the component generator.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override for a run, set environment variables:
        export V0_API_KEY=v1:xxxx
        export DELAY_BETWEEN_REQUESTS=5
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # V0 PLATFORM API SETTINGS
    # ---------------------------------------------------------------------------
    # V0_API_KEY: Key from https://v0.dev/chat/settings/keys
    # - Required by the CLI; the run aborts before any processing without it
    V0_API_KEY: str = ""

    # V0_API_URL: Base URL of the v0 Platform API
    V0_API_URL: str = "https://api.v0.dev/v1"

    # V0_REQUEST_TIMEOUT: Seconds to wait for a single chat request
    # - Generation is slow, a chat with files regularly takes minutes
    V0_REQUEST_TIMEOUT: float = 300.0

    # ---------------------------------------------------------------------------
    # DESIGN PACKAGE LAYOUT
    # ---------------------------------------------------------------------------
    # Both paths are relative to the design package passed on the command line
    PROMPTS_DIR: str = "design-reference/v0-prompts"
    OUTPUT_DIR: str = "design-reference/v0-components"

    # Extension of every written component file
    OUTPUT_EXTENSION: str = ".tsx"

    # ---------------------------------------------------------------------------
    # PACING
    # ---------------------------------------------------------------------------
    # DELAY_BETWEEN_REQUESTS: Pause between two prompts of a batch (seconds)
    DELAY_BETWEEN_REQUESTS: float = 3.0

    # RATE_LIMIT_COOLDOWN: Wait before the single retry after a rate limit
    RATE_LIMIT_COOLDOWN: float = 60.0

    # ---------------------------------------------------------------------------
    # LOGGING
    # ---------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from componentgen.core.config import settings
settings = Settings()
