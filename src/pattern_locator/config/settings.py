"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from pattern_locator.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.resolver.retry_timeout_ms)
    30000
"""

from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResolverSettings(BaseModel):
    """
    Pattern resolution settings.

    Attributes:
        enable: Route logical field references through the pattern engine
        default_pattern: Page object used when no override or URL mapping applies
        page_mapping: URL substring -> page object code, checked in order
        retry_timeout_ms: Total time budget for one resolution call
        retry_interval_ms: Wait between failed resolution passes
        scroll_step_px: Vertical distance of one wheel step
        scroll_settle_ms: Delay after each wheel step
        max_scroll_steps: Wheel steps allowed per scroll target per cycle
        indirection_attribute: Label attribute naming the labelled control
    """
    enable: bool = True
    default_pattern: Optional[str] = None
    page_mapping: Dict[str, str] = Field(default_factory=dict)
    retry_timeout_ms: int = Field(default=30000, ge=0, le=600000)
    retry_interval_ms: int = Field(default=2000, ge=0, le=60000)
    scroll_step_px: int = Field(default=400, ge=1, le=10000)
    scroll_settle_ms: int = Field(default=500, ge=0, le=10000)
    max_scroll_steps: int = Field(default=10, ge=1, le=10)
    indirection_attribute: str = "for"


class PatternSettings(BaseModel):
    """
    Locations of page-object pattern files and resource locator files.

    Attributes:
        patterns_dir: Directory scanned for *.pattern.yaml files
        locators_dir: Directory holding JSON files for loc.json.* references
    """
    patterns_dir: str = "resources/locators/pattern"
    locators_dir: str = "resources/locators/loc-json"


class BrowserSettings(BaseModel):
    """
    Browser automation settings.

    Attributes:
        headless: Run browser in headless mode
        browser_type: Playwright browser to launch
        timeout_ms: Default timeout for navigation
    """
    headless: bool = True
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    timeout_ms: int = Field(default=30000, ge=1000, le=300000)


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with PATTERN_LOCATOR__)
    3. Config file (YAML)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(resolver=ResolverSettings(default_pattern="loginPage"))
    """

    model_config = SettingsConfigDict(
        env_prefix="PATTERN_LOCATOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    patterns: PatternSettings = Field(default_factory=PatternSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Forces DEBUG logging in the CLI regardless of logging.level
    debug: bool = False

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)
