"""
Configuration module for the Privacy Intelligence System.

Provides Pydantic-based settings management with YAML file support
and environment variable overrides.
"""

from privacy_intel.config.settings import (
    Settings,
    BrowserSettings,
    FetchSettings,
    BatchSettings,
    AnalysisSettings,
    ValidatorSettings,
    LLMSettings,
    LoggingSettings,
    DEFAULT_USER_AGENT,
)
from privacy_intel.config.loader import (
    load_config,
    get_settings,
    reset_settings,
    get_default_config_path,
)

__all__ = [
    "Settings",
    "BrowserSettings",
    "FetchSettings",
    "BatchSettings",
    "AnalysisSettings",
    "ValidatorSettings",
    "LLMSettings",
    "LoggingSettings",
    "DEFAULT_USER_AGENT",
    "load_config",
    "get_settings",
    "reset_settings",
    "get_default_config_path",
]
