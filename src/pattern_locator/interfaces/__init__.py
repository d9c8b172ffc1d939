"""
Interfaces module - Abstract base classes for pluggable components.

This module defines the contract a browser engine must implement for the
resolution engine to drive it.
"""

from pattern_locator.interfaces.browser import (
    IBrowser,
    IPage,
    ILocator,
    BrowserType,
)

__all__ = [
    "IBrowser",
    "IPage",
    "ILocator",
    "BrowserType",
]
