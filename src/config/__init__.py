"""
Configuration package for the Bus Route Simulator.

This package provides pydantic-based settings with environment-specific
defaults and the logging setup used by the command line tools.

Usage:
    from config import get_settings

    settings = get_settings()
    print(f"Running in {settings.environment} mode")
"""

from .settings import (
    BaseConfig,
    DevelopmentConfig,
    TestingConfig,
    ProductionConfig,
    Environment,
    LogLevel,
    ConfigurationError,
    configure_logging,
    get_settings,
    clear_config_cache,
)

__version__ = "1.0.0"

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
