"""
Environment configuration loader with validation for the airline records tool.
"""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from ..database.config import StoreConfig, normalize_database_url

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")


class AppConfig(BaseModel):
    """Configuration model for the airline records tool with validation."""

    database_url: str = Field(
        default="sqlite+aiosqlite:///airline.db", description="SQLite database URL"
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only SQLite URLs are accepted; the async driver is filled in."""
        return normalize_database_url(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    def store_config(self) -> StoreConfig:
        return StoreConfig(database_url=self.database_url, echo=self.echo_sql)


def load_config(env_file: Optional[str] = None, **overrides: Any) -> AppConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.
        overrides: Values that take precedence over the environment (None values are ignored)

    Returns:
        AppConfig: Validated configuration object

    Raises:
        ValueError: If configuration is invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    config_data: Dict[str, Any] = {
        "database_url": os.getenv("DATABASE_URL", "sqlite+aiosqlite:///airline.db"),
        "echo_sql": os.getenv("AIRLINE_ECHO_SQL", "false").lower() in TRUE_VALUES,
        "log_level": os.getenv("AIRLINE_LOG_LEVEL", "INFO"),
    }
    config_data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return AppConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance, loading it if necessary.

    Returns:
        AppConfig: The global configuration object
    """
    global _config
    if _config is None:
        _config = load_config()
        logger.debug(f"Configuration loaded: database={_config.database_url}")
    return _config
