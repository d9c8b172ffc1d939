"""
Configuration module - Resolver, pattern file, browser and logging settings.

Usage:
    from pattern_locator.config import get_settings, load_config

    # Process-wide settings, loaded on first use
    settings = get_settings()

    # Fresh settings for one run
    settings = load_config(resolver={"default_pattern": "loginPage"})

Environment Variables:
    PATTERN_LOCATOR__RESOLVER__DEFAULT_PATTERN=loginPage
    PATTERN_LOCATOR__RESOLVER__RETRY_TIMEOUT_MS=10000
    PATTERN_LOCATOR__PATTERNS__PATTERNS_DIR=resources/locators/pattern
"""

from pattern_locator.config.settings import (
    Settings,
    ResolverSettings,
    PatternSettings,
    BrowserSettings,
    LoggingSettings,
)
from pattern_locator.config.loader import ConfigLoader, load_config

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide Settings, loaded on first call. reset_settings() forces a reload."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "ResolverSettings",
    "PatternSettings",
    "BrowserSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
