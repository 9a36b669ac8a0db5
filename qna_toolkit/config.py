"""
Configuration module for the QnA toolkit.

Provides centralized configuration for storage, logging and the CLI.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator


class QnAConfig(BaseModel):
    """Central configuration for the QnA toolkit.

    Each instance comes from exactly one source: keyword arguments,
    ``from_env`` (QNA_ prefixed variables) or ``from_file`` (JSON). Fields
    the source does not set keep their defaults.

    Example:
        >>> config = QnAConfig(database_url="postgresql://forum@db/forum")

        Loading from environment:

        >>> os.environ['QNA_DATABASE_URL'] = 'sqlite:///./forum.db'
        >>> config = QnAConfig.from_env()

    Environment Variables:
        - QNA_APPLICATION_NAME
        - QNA_ENVIRONMENT
        - QNA_DATABASE_URL
        - QNA_DATABASE_ECHO
        - QNA_DATABASE_POOL_SIZE
        - QNA_LOG_LEVEL
    """

    # General settings
    application_name: str = Field("QnA Forum", description="Name of the application")
    environment: str = Field(
        "production", description="Environment (development, staging, production)"
    )

    # Storage settings
    database_url: str = Field(
        "sqlite:///./qna.db", description="SQLAlchemy database connection string"
    )
    database_echo: bool = Field(False, description="Echo SQL statements to the log")
    database_pool_size: int = Field(
        5, description="Connection pool size for server databases", gt=0, le=100
    )

    # Logging
    log_level: str = Field("INFO", description="Root log level for the CLI")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is valid."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Environment must be one of: {', '.join(sorted(valid_environments))}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "QnAConfig":
        """
        Load configuration from a JSON file.

        Args:
            path: Path to the JSON configuration file

        Returns:
            Configuration instance
        """
        with open(path, "r", encoding="utf-8") as fh:
            return cls.model_validate(json.load(fh))

    @classmethod
    def from_env(cls, prefix: str = "QNA_") -> "QnAConfig":
        """
        Load configuration from environment variables.

        Args:
            prefix: Prefix for environment variables

        Returns:
            Configuration instance
        """
        config_dict: Dict[str, Any] = {}

        for field_name, field_info in cls.model_fields.items():
            env_var = f"{prefix}{field_name.upper()}"
            if env_var not in os.environ:
                continue

            value = os.environ[env_var]
            field_type = field_info.annotation

            try:
                if field_type == bool:
                    config_dict[field_name] = value.lower() in (
                        "true",
                        "1",
                        "yes",
                        "on",
                    )
                elif field_type == int:
                    config_dict[field_name] = int(value)
                else:
                    config_dict[field_name] = value
            except (ValueError, TypeError):
                # Let model validation report the bad value
                config_dict[field_name] = value

        return cls.model_validate(config_dict)

    def get_engine_options(
        self, database_url: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Get keyword arguments for ``sqlalchemy.create_engine``.

        Args:
            database_url: URL the engine is created for, defaults to database_url
        """
        url = database_url or self.database_url
        options: Dict[str, Any] = {"echo": self.database_echo, "pool_pre_ping": True}
        # SQLite doesn't support pool_size
        if not url.startswith("sqlite"):
            options["pool_size"] = self.database_pool_size
        return options


# Global configuration instance
_config: Optional[QnAConfig] = None


def get_config() -> QnAConfig:
    """
    Get the global configuration instance.

    Returns:
        Global configuration
    """
    global _config

    if _config is None:
        _config = QnAConfig.from_env()

    return _config


def set_config(config: Optional[QnAConfig]) -> None:
    """
    Set the global configuration instance.

    Args:
        config: Configuration to set, or None to reload from the environment
    """
    global _config
    _config = config


def configure(**kwargs: Any) -> QnAConfig:
    """
    Configure the toolkit with keyword arguments.

    Args:
        **kwargs: Configuration parameters

    Returns:
        Updated configuration
    """
    global _config

    if _config is None:
        _config = QnAConfig(**kwargs)
    else:
        config_dict = _config.to_dict()
        config_dict.update(kwargs)
        _config = QnAConfig(**config_dict)

    return _config
