"""
Command-line configuration settings.
"""

import logging
import os
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "SKILL_CREATOR_"


class Settings(BaseSettings):
    """
    Tool settings with environment variable loading.

    Every setting can be overridden with a ``SKILL_CREATOR_`` prefixed
    environment variable or through a local ``.env`` file.
    """

    # Project info
    PROJECT_NAME: str = "Skill Creator"
    PROJECT_DESCRIPTION: str = "Scaffold, validate and package skill bundles"
    VERSION: str = "0.1.0"

    # Environment settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "warning"

    # Sentry settings
    SENTRY_DSN: str = ""

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, value: str) -> str:
        """Validate environment setting."""
        allowed_environments = ["development", "testing", "production"]
        if value.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return value.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate and normalize log level.

        Accepts case-insensitive log level but returns uppercase for consistency.
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

        if value.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return value.upper()

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        """Initialize settings and configure logging on stderr."""
        super().__init__(**kwargs)

        logging.basicConfig(
            format="%(asctime)s %(levelname)-8s %(message)s", level=self.LOG_LEVEL, datefmt="%Y-%m-%d %H:%M:%S"
        )

        env_vars = {
            k: v
            for k, v in os.environ.items()
            if k.startswith(ENV_PREFIX) and k.removeprefix(ENV_PREFIX) in self.__dict__
        }

        logger.debug(f"Running in {self.ENVIRONMENT} mode | Log level: {self.LOG_LEVEL}")
        for key, value in env_vars.items():
            logger.debug(f"{key}={value}")


@lru_cache
def get_settings() -> Settings:
    """Load the settings once, on first use."""
    return Settings()
