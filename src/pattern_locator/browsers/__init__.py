"""
Browsers module - Browser automation implementations.
"""

from pattern_locator.browsers.playwright_browser import (
    PlaywrightBrowser,
    PlaywrightPage,
    PlaywrightLocator,
)

__all__ = [
    "PlaywrightBrowser",
    "PlaywrightPage",
    "PlaywrightLocator",
]
