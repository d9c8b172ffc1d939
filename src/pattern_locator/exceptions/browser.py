"""
Browser-related exceptions.
"""

from pattern_locator.exceptions.base import PatternLocatorError


class BrowserError(PatternLocatorError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.

    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries
    - Invalid browser options
    - Resource constraints
    """
    pass


class BrowserConnectionError(BrowserError):
    """
    Error connecting to the browser.

    Raised when the browser is used before launch() or after close().
    """
    pass


class PageError(BrowserError):
    """Base exception for page-related errors."""
    pass


class NavigationError(PageError):
    """
    Error during page navigation.

    Raised when navigation fails, such as:
    - Invalid URL
    - Network error
    - Navigation timeout
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url
