"""
Browser Interface - The slice of a live document session the engine drives.

The resolver needs very little from a page: its URL, whether it is still
open, one load wait, a single script evaluation per strategy, locator
handles and wheel scrolling. Keeping that surface small lets unit tests
run against an in-memory fake page and production run on Playwright.

Example:
    >>> from pattern_locator.browsers import PlaywrightBrowser
    >>> browser = PlaywrightBrowser()
    >>> await browser.launch(headless=True)
    >>> page = await browser.new_page()
    >>> await page.goto("https://example.com/login")
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional


class BrowserType(Enum):
    """Browser engines Playwright can launch."""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class ILocator(ABC):
    """
    Lazy element query handed back to callers once a field resolves.

    The scroll controller uses ``count``, ``nth``, ``is_visible``,
    ``scroll_into_view`` and ``hover`` on scroll containers. ``click`` and
    ``fill`` are for test steps acting on the resolved element.
    """

    @property
    @abstractmethod
    def selector(self) -> str:
        """Selector this locator was built from."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Number of elements matching right now."""
        ...

    @abstractmethod
    def nth(self, index: int) -> "ILocator":
        """Locator for the match at a zero-based index."""
        ...

    @abstractmethod
    async def is_visible(self) -> bool:
        ...

    @abstractmethod
    async def scroll_into_view(self, timeout: Optional[int] = None) -> None:
        ...

    @abstractmethod
    async def hover(self, timeout: Optional[int] = None) -> None:
        """Move the pointer over the element so wheel events reach it."""
        ...

    @abstractmethod
    async def click(self, **options: Any) -> None:
        ...

    @abstractmethod
    async def fill(self, value: str, **options: Any) -> None:
        ...


class IPage(ABC):
    """
    Live document session.

    ``evaluate`` must run the whole function inside the page in one round
    trip; the chain lookup relies on that to check location, section and
    field against a single DOM snapshot.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        ...

    @abstractmethod
    def is_closed(self) -> bool:
        """True once the page has been torn down."""
        ...

    @abstractmethod
    async def goto(self, url: str, **options: Any) -> None:
        """
        Navigate to a URL.

        Raises:
            NavigationError: If navigation fails
        """
        ...

    @abstractmethod
    async def set_content(self, html: str, **options: Any) -> None:
        """Replace the document with the given markup."""
        ...

    @abstractmethod
    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        ...

    @abstractmethod
    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """
        Run a JavaScript function in the page.

        Args:
            expression: Function source, called with ``arg``
            arg: JSON-serializable argument

        Returns:
            The function's serialized return value
        """
        ...

    @abstractmethod
    def locator(self, selector: str) -> ILocator:
        """Locator for a CSS, XPath or ``>>`` chained selector."""
        ...

    @abstractmethod
    async def mouse_wheel(self, delta_x: float, delta_y: float) -> None:
        """Dispatch a wheel event at the pointer position."""
        ...

    @abstractmethod
    async def wait_for_timeout(self, timeout: int) -> None:
        """Sleep for ``timeout`` milliseconds without blocking the loop."""
        ...

    @abstractmethod
    async def close(self) -> None:
        ...


class IBrowser(ABC):
    """Owns the browser process and hands out pages."""

    @abstractmethod
    async def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROMIUM,
        **options: Any,
    ) -> None:
        """
        Start the browser.

        Raises:
            BrowserLaunchError: If the engine cannot be started
        """
        ...

    @abstractmethod
    async def new_page(self, **options: Any) -> IPage:
        """
        Open a page in the shared context.

        Raises:
            BrowserConnectionError: If called before ``launch``
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        ...
