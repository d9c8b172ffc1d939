"""
Scroll Controller - Reveal lazily rendered content between attempts.
"""

from typing import List, Sequence
import logging

from pattern_locator.interfaces.browser import ILocator, IPage

logger = logging.getLogger(__name__)


class ScrollController:
    """
    Wheel-scrolls the page, or configured scroll containers, once per failed pass.

    Each scroll target gets at most ``max_steps`` wheel steps per cycle,
    shared between its visible matches. Each match is scrolled into view and
    hovered first so the wheel events land on it. With no targets the
    viewport itself is scrolled ``max_steps`` times. Page errors end the
    affected step and never propagate.
    """

    def __init__(
        self,
        step_px: int = 400,
        settle_ms: int = 500,
        max_steps: int = 10,
        into_view_timeout_ms: int = 2000,
    ):
        self.step_px = step_px
        self.settle_ms = settle_ms
        self.max_steps = max(1, min(max_steps, 10))
        self.into_view_timeout_ms = into_view_timeout_ms

    async def _wheel(self, page: IPage, steps: int) -> int:
        done = 0
        for _ in range(steps):
            if page.is_closed():
                break
            try:
                await page.mouse_wheel(0, self.step_px)
                await page.wait_for_timeout(self.settle_ms)
            except Exception as e:
                logger.debug(f"Wheel scroll stopped after {done} step(s): {e}")
                break
            done += 1
        return done

    async def _visible_matches(self, page: IPage, selector: str) -> List[ILocator]:
        locator = page.locator(selector)
        try:
            count = await locator.count()
        except Exception as e:
            logger.debug(f"Scroll target {selector!r} could not be counted: {e}")
            return []

        visible = []
        for i in range(count):
            item = locator.nth(i)
            try:
                if await item.is_visible():
                    visible.append(item)
            except Exception as e:
                logger.debug(f"Scroll target {selector!r} [{i}] skipped: {e}")
        return visible

    async def scroll(self, page: IPage, targets: Sequence[str] = ()) -> int:
        """
        Run one scroll cycle.

        Args:
            page: Live page
            targets: Scroll container selectors; empty scrolls the viewport

        Returns:
            Number of wheel steps performed
        """
        if page.is_closed():
            logger.warning("Cannot scroll: page is already closed")
            return 0

        if not targets:
            logger.debug("Scrolling page to reveal lazy-loaded content")
            return await self._wheel(page, self.max_steps)

        total = 0
        for selector in targets:
            matches = await self._visible_matches(page, selector)
            budget = self.max_steps
            for index, item in enumerate(matches):
                if page.is_closed():
                    return total
                logger.debug(f"Scrolling visible scroll element {selector} [{index}]")
                remaining = len(matches) - index
                try:
                    await item.scroll_into_view(timeout=self.into_view_timeout_ms)
                except Exception as e:
                    logger.debug(f"Scroll element {selector} [{index}] could not be scrolled into view: {e}")
                    continue
                try:
                    await item.hover(timeout=self.into_view_timeout_ms)
                except Exception as e:
                    logger.debug(f"Could not move pointer over {selector} [{index}]: {e}")
                share = max(1, budget // remaining) if budget else 0
                performed = await self._wheel(page, share)
                budget -= performed
                total += performed
        return total
