"""
Playwright Browser - Page session backed by playwright.async_api.

Thin wrappers only: every method forwards to the Playwright object and
translates launch and navigation failures into the package's exceptions.
"""

from typing import Any, Optional
import logging

from pattern_locator.interfaces.browser import (
    IBrowser,
    IPage,
    ILocator,
    BrowserType,
)
from pattern_locator.exceptions.browser import (
    BrowserLaunchError,
    BrowserConnectionError,
    NavigationError,
)

logger = logging.getLogger(__name__)


class PlaywrightLocator(ILocator):
    """Wraps a Playwright Locator and remembers the selector it came from."""

    def __init__(self, locator: Any, selector: str):
        self._locator = locator
        self._selector = selector

    @property
    def selector(self) -> str:
        return self._selector

    async def count(self) -> int:
        return await self._locator.count()

    def nth(self, index: int) -> ILocator:
        return PlaywrightLocator(self._locator.nth(index), f"{self._selector} >> nth={index}")

    async def is_visible(self) -> bool:
        return await self._locator.is_visible()

    async def scroll_into_view(self, timeout: Optional[int] = None) -> None:
        await self._locator.scroll_into_view_if_needed(timeout=timeout)

    async def hover(self, timeout: Optional[int] = None) -> None:
        await self._locator.hover(timeout=timeout)

    async def click(self, **options: Any) -> None:
        await self._locator.click(**options)

    async def fill(self, value: str, **options: Any) -> None:
        await self._locator.fill(value, **options)


class PlaywrightPage(IPage):
    """Wraps a Playwright Page."""

    def __init__(self, page: Any):
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    def is_closed(self) -> bool:
        return self._page.is_closed()

    async def goto(self, url: str, **options: Any) -> None:
        try:
            await self._page.goto(url, **options)
        except Exception as e:
            raise NavigationError(f"Failed to navigate to {url}: {e}", url=url)
        logger.debug(f"Navigated to {self._page.url}")

    async def set_content(self, html: str, **options: Any) -> None:
        await self._page.set_content(html, **options)

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        await self._page.wait_for_load_state(state, timeout=timeout)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return await self._page.evaluate(expression, arg)

    def locator(self, selector: str) -> ILocator:
        return PlaywrightLocator(self._page.locator(selector), selector)

    async def mouse_wheel(self, delta_x: float, delta_y: float) -> None:
        await self._page.mouse.wheel(delta_x, delta_y)

    async def wait_for_timeout(self, timeout: int) -> None:
        await self._page.wait_for_timeout(timeout)

    async def close(self) -> None:
        await self._page.close()


class PlaywrightBrowser(IBrowser):
    """
    One Playwright browser with a single shared context.

    Example:
        >>> browser = PlaywrightBrowser()
        >>> await browser.launch(headless=True)
        >>> page = await browser.new_page()
        >>> await page.goto("https://example.com")
        >>> await browser.close()
    """

    def __init__(self):
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None

    async def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROMIUM,
        **options: Any,
    ) -> None:
        try:
            from playwright.async_api import async_playwright

            self._playwright = await async_playwright().start()
            launcher = getattr(self._playwright, browser_type.value)
            self._browser = await launcher.launch(headless=headless, **options)
        except Exception as e:
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
            raise BrowserLaunchError(f"Failed to launch {browser_type.value}: {e}")

        logger.info(f"Launched {browser_type.value} browser (headless={headless})")

    async def new_page(self, **options: Any) -> IPage:
        if not self._browser:
            raise BrowserConnectionError("Browser not launched. Call launch() first.")

        if not self._context:
            self._context = await self._browser.new_context(**options)

        return PlaywrightPage(await self._context.new_page())

    async def close(self) -> None:
        """Close the context, the browser and the Playwright driver, in that order."""
        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")
