"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Pattern Locator,
providing clear error types for different failure scenarios.
"""

from pattern_locator.exceptions.base import (
    PatternLocatorError,
    ConfigurationError,
)
from pattern_locator.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    BrowserConnectionError,
    PageError,
    NavigationError,
)
from pattern_locator.exceptions.resolution import (
    PatternCodeNotFoundError,
    PatternFileError,
    InvalidLocatorError,
)

__all__ = [
    # Base exceptions
    "PatternLocatorError",
    "ConfigurationError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "BrowserConnectionError",
    "PageError",
    "NavigationError",
    # Resolution exceptions
    "PatternCodeNotFoundError",
    "PatternFileError",
    "InvalidLocatorError",
]
