"""Configuration management module."""

from dayprism.core.config.settings import (
    AlphaVantageConfig,
    ConfigManager,
    DayPrismConfig,
    LoggingConfig,
    WebConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "AlphaVantageConfig",
    "ConfigManager",
    "DayPrismConfig",
    "LoggingConfig",
    "WebConfig",
    "get_default_config",
    "load_config_from_env",
]
