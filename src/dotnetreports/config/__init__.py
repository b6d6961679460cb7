"""Configuration loading, validation and the report kind registry."""

from dotnetreports.config.coverage import KindRegistry, UnknownLanguageError
from dotnetreports.config.loader import ConfigError, load_config
from dotnetreports.config.models import PropertySource, ReportsConfig

__all__ = [
    "ConfigError",
    "KindRegistry",
    "PropertySource",
    "ReportsConfig",
    "UnknownLanguageError",
    "load_config",
]
