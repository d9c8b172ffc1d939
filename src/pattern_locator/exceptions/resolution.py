"""
Resolution-related exceptions.

Only configuration problems are raised out of a resolution call. Missing
strategies, timeouts and closed pages are reported through the returned
ResolvedLocator instead.
"""

from pattern_locator.exceptions.base import ConfigurationError, PatternLocatorError


class PatternCodeNotFoundError(ConfigurationError):
    """
    No page object could be selected for a resolution call.

    Raised when there is no explicit override, no URL mapping matches the
    current page and no default page object is configured.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url


class PatternFileError(ConfigurationError):
    """
    A page-object pattern file could not be loaded.

    Raised for unreadable YAML or a top level that is not a mapping.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, {"path": path})
        self.path = path


class InvalidLocatorError(PatternLocatorError):
    """
    A resource locator string is malformed or points nowhere.

    Raised for `loc.` references whose file, page or field does not exist.
    """

    def __init__(self, message: str, selector: str):
        super().__init__(message, {"selector": selector})
        self.selector = selector
