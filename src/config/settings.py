"""
Configuration module for the Bus Route Simulator.

This module provides configuration management with:
- Pydantic-based validation and type checking
- Environment-specific configurations
- Logging setup shared by the CLI and the interactive shell
"""

import os
import sys
import logging
from functools import lru_cache
from typing import Optional
from enum import Enum

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""
    pass


class BaseConfig(BaseSettings):
    """Base configuration with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUS_ROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment"
    )

    # Application
    app_name: str = Field(
        default="Bus Route Simulator",
        description="Application name"
    )

    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Logging level"
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Write logs to this file instead of stderr"
    )

    # Route files
    default_route_file: str = Field(
        default="route.csv",
        min_length=1,
        description="File offered by the save/load prompts"
    )

    # Display
    display_precision: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places used when printing distances and times"
    )

    sample_on_start: bool = Field(
        default=False,
        description="Populate the demo route when the shell starts"
    )

    @field_validator("default_route_file")
    @classmethod
    def validate_route_file(cls, v):
        """Reject route file names that are only whitespace."""
        if not v.strip():
            raise ValueError("default_route_file must not be blank")
        return v.strip()


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    environment: Environment = Environment.TESTING
    debug: bool = True
    log_level: LogLevel = LogLevel.WARNING


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    environment: Environment = Environment.PRODUCTION
    debug: bool = False
    log_level: LogLevel = LogLevel.ERROR


# Configuration mapping
CONFIG_MAPPING = {
    Environment.DEVELOPMENT: DevelopmentConfig,
    Environment.TESTING: TestingConfig,
    Environment.PRODUCTION: ProductionConfig,
}


def _load_environment_file() -> None:
    """Load environment variables from .env file."""
    env_file = os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_file):
        load_dotenv(env_file)


def _get_environment() -> Environment:
    """Get current environment from environment variable."""
    env_str = os.getenv("BUS_ROUTE_ENVIRONMENT", "development").lower()

    try:
        return Environment(env_str)
    except ValueError:
        logging.warning(f"Invalid environment '{env_str}', defaulting to development")
        return Environment.DEVELOPMENT


def _create_config(environment: Optional[Environment] = None) -> BaseConfig:
    """Create configuration instance for specified environment."""
    if environment is None:
        environment = _get_environment()

    config_class = CONFIG_MAPPING.get(environment, DevelopmentConfig)

    try:
        return config_class()
    except Exception as e:
        raise ConfigurationError(f"Failed to create configuration: {e}")


def configure_logging(config: BaseConfig) -> None:
    """Route structlog through stdlib logging at the configured level.

    Log records go to stderr (or ``log_file``) so they never interleave with
    the menu output written to stdout.
    """
    if config.log_file:
        handler: logging.Handler = logging.FileHandler(config.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(config.log_format))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.log_level.value))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@lru_cache(maxsize=4)
def get_settings(environment: Optional[Environment] = None) -> BaseConfig:
    """
    Get application settings with caching.

    Args:
        environment: Specific environment to load (optional)

    Returns:
        BaseConfig: Configuration instance

    Raises:
        ConfigurationError: If configuration validation fails
    """
    _load_environment_file()

    try:
        config = _create_config(environment)
    except ConfigurationError as e:
        logging.error(f"Configuration loading failed: {e}")
        raise

    configure_logging(config)
    logging.getLogger(__name__).info(
        f"Configuration loaded for {config.environment.value} environment"
    )
    return config


def clear_config_cache() -> None:
    """Clear configuration cache."""
    get_settings.cache_clear()
    logging.getLogger(__name__).info("Configuration cache cleared")


# Export commonly used functions and classes
__all__ = [
    "BaseConfig",
    "DevelopmentConfig",
    "TestingConfig",
    "ProductionConfig",
    "Environment",
    "LogLevel",
    "ConfigurationError",
    "configure_logging",
    "get_settings",
    "clear_config_cache",
]
