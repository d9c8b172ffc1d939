"""
Example: Login Flow

This example shows how to resolve logical field names on a login page.
"""

import asyncio

from pattern_locator.browsers import PlaywrightBrowser
from pattern_locator.config import load_config
from pattern_locator.engine import LocatorResolver
from pattern_locator.utils.logging import setup_logging


async def main():
    """Fill and submit a login form using page-object patterns."""

    # Load configuration (from env vars, config files, or defaults)
    settings = load_config(
        config_path="examples/pattern-locator.yaml",
    )
    setup_logging(settings.logging.level)

    resolver = LocatorResolver.from_settings(settings)

    browser = PlaywrightBrowser()
    await browser.launch(headless=settings.browser.headless)
    try:
        page = await browser.new_page()
        await page.goto("https://the-internet.herokuapp.com/login")

        username = await resolver.resolve(page, "input", "Username")
        password = await resolver.resolve(page, "input", "Password")
        login = await resolver.resolve(page, "button", "Login", timeout_ms=5000)

        for resolved in (username, password, login):
            print(f"{resolved.element_type:8} -> {resolved}")

        if username.is_resolved and password.is_resolved:
            await username.locator.fill("tomsmith")
            await password.locator.fill("SuperSecretPassword!")
        if login.is_resolved:
            await login.locator.click()

        print(f"Current URL: {page.url}")
    finally:
        await browser.close()


if __name__ == "__main__":
    asyncio.run(main())
