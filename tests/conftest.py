"""
Pytest configuration and fixtures.

The FakePage below stands in for a live document. Its DOM is a dict of
exact selector strings to element specs:

    {
        "//button[text()='Submit']": {"visible": True},
        "//label[text()='Email']": {"attrs": {"for": "email"}},
        "//button[text()='More']": {"reveal_after": 10},   # visible after 10 wheel steps
        "//form[@id='login']": {},
    }

Scroll containers are declared separately as selector -> list of match
visibilities. Time only moves when the engine waits, via the fake clock.
``detached``, ``fail_wheel`` and ``fail_load`` make the matching page calls
raise the way Playwright does when the DOM changes underneath it.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

import pytest

from pattern_locator.config import ResolverSettings, reset_settings
from pattern_locator.interfaces.browser import ILocator, IPage
from pattern_locator.variables.patterns import flatten
from pattern_locator.variables.store import VariableStore


class FakeClock:
    """Monotonic clock advanced explicitly; reads in seconds like time.monotonic."""

    def __init__(self):
        self.now_ms = 0

    def __call__(self) -> float:
        return self.now_ms / 1000

    def advance_ms(self, ms: int) -> None:
        self.now_ms += ms


class FakeLocator(ILocator):
    """Locator over the fake DOM or a fake scroll container."""

    def __init__(self, page: "FakePage", selector: str, index: Optional[int] = None):
        self._page = page
        self._selector = selector
        self._index = index

    @property
    def selector(self) -> str:
        return self._selector

    async def count(self) -> int:
        if self._selector in self._page.scroll_containers:
            return len(self._page.scroll_containers[self._selector])
        return 1 if self._page.is_visible(self._selector) else 0

    def nth(self, index: int) -> ILocator:
        return FakeLocator(self._page, self._selector, index)

    async def is_visible(self) -> bool:
        if self._selector in self._page.scroll_containers:
            return self._page.scroll_containers[self._selector][self._index or 0]
        return self._page.is_visible(self._selector)

    async def scroll_into_view(self, timeout: Optional[int] = None) -> None:
        if (self._selector, self._index) in self._page.detached:
            raise RuntimeError("Element is not attached to the DOM")
        self._page.scrolled_into_view.append((self._selector, self._index))

    async def hover(self, timeout: Optional[int] = None) -> None:
        self._page.hovered.append((self._selector, self._index))

    async def click(self, **options: Any) -> None:
        self._page.clicks.append(self._selector)

    async def fill(self, value: str, **options: Any) -> None:
        self._page.fills[self._selector] = value


class FakePage(IPage):
    """Page whose evaluate() answers the chain lookup script from a dict DOM."""

    def __init__(
        self,
        dom: Optional[Dict[str, Dict[str, Any]]] = None,
        url: str = "https://example.com/login",
        clock: Optional[FakeClock] = None,
        scroll_containers: Optional[Dict[str, List[bool]]] = None,
        invalid: Optional[List[str]] = None,
        close_after_evaluations: Optional[int] = None,
        detached: Optional[List[Tuple[str, int]]] = None,
        fail_wheel: bool = False,
        fail_load: bool = False,
    ):
        self.dom = dom or {}
        self._url = url
        self.clock = clock or FakeClock()
        self.scroll_containers = scroll_containers or {}
        self.invalid = set(invalid or [])
        self.close_after_evaluations = close_after_evaluations
        self.detached = set(detached or [])
        self.fail_wheel = fail_wheel
        self.fail_load = fail_load

        self.closed = False
        self.wheel_steps = 0
        self.load_waits: List[str] = []
        self.timeouts: List[int] = []
        self.evaluations: List[Dict[str, Any]] = []
        self.scrolled_into_view: List[Any] = []
        self.hovered: List[Tuple[str, Optional[int]]] = []
        self.clicks: List[str] = []
        self.fills: Dict[str, str] = {}

    def is_visible(self, selector: str) -> bool:
        entry = self.dom.get(selector)
        if entry is None:
            return False
        if not entry.get("visible", True):
            return False
        return self.wheel_steps >= entry.get("reveal_after", 0)

    @property
    def url(self) -> str:
        return self._url

    def is_closed(self) -> bool:
        return self.closed

    async def goto(self, url: str, **options: Any) -> None:
        self._url = url

    async def set_content(self, html: str, **options: Any) -> None:
        pass

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        self.load_waits.append(state)
        if self.fail_load:
            raise TimeoutError("Timeout exceeded while waiting for load")

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluations.append(dict(arg))
        if self.close_after_evaluations is not None and len(self.evaluations) >= self.close_after_evaluations:
            self.closed = True

        miss = {"chain": "", "indirection": "", "error": ""}
        parts = []
        for scope in (arg["locationLocator"], arg["sectionLocator"]):
            if not scope:
                continue
            if scope not in self.dom:
                return miss
            parts.append(scope.strip())

        field = arg["fieldLocator"]
        if field in self.invalid:
            return {"chain": "", "indirection": "", "error": f"'{field}' is not a valid selector"}
        if not self.is_visible(field):
            return miss
        parts.append(field.strip())

        indirection = ""
        if arg["isLabelCheck"]:
            attrs = self.dom[field].get("attrs", {})
            indirection = attrs.get(arg["indirectionAttribute"], "")
        return {"chain": " >> ".join(parts), "indirection": indirection, "error": ""}

    def locator(self, selector: str) -> ILocator:
        return FakeLocator(self, selector)

    async def mouse_wheel(self, delta_x: float, delta_y: float) -> None:
        if self.fail_wheel:
            raise RuntimeError("Target page, context or browser has been closed")
        self.wheel_steps += 1

    async def wait_for_timeout(self, timeout: int) -> None:
        self.timeouts.append(timeout)
        self.clock.advance_ms(timeout)

    async def close(self) -> None:
        self.closed = True

    @property
    def field_lookups(self) -> List[str]:
        return [e["fieldLocator"] for e in self.evaluations if not e["isLabelCheck"]]

    @property
    def label_lookups(self) -> List[str]:
        return [e["fieldLocator"] for e in self.evaluations if e["isLabelCheck"]]


LOGIN_PAGE = {
    "fields": {
        "label": "//label[text()='#{loc.auto.fieldName}'];//label[contains(text(),'#{loc.auto.fieldName}')]",
        "input": "//input[@id='#{loc.auto.forId}'];//input[@placeholder='#{loc.auto.fieldName}']",
        "button": "//button[text()='#{loc.auto.fieldName}'];button[aria-label='#{loc.auto.fieldName}']",
        "link": "//a[text()='#{loc.auto.fieldName}']",
    },
    "sections": {
        "Login Form": "//form[@id='login']",
        "form": "//form[@aria-label='#{loc.auto.section.value}']",
    },
    "locations": {
        "Header": "header",
    },
}


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep tests independent of the developer's environment."""
    for name in list(os.environ):
        if name.upper().startswith("PATTERN_LOCATOR__"):
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def clock():
    """Provide a fake monotonic clock."""
    return FakeClock()


@pytest.fixture
def make_page(clock):
    """Factory for fake pages sharing the test clock."""
    def factory(dom=None, **kwargs) -> FakePage:
        kwargs.setdefault("clock", clock)
        return FakePage(dom, **kwargs)
    return factory


@pytest.fixture
def store():
    """Provide a variable store with the loginPage page object loaded."""
    store = VariableStore()
    store.update(flatten("loginPage", LOGIN_PAGE))
    return store


@pytest.fixture
def resolver_settings():
    """Resolver settings with small waits so fake time stays readable."""
    return ResolverSettings(
        default_pattern="loginPage",
        retry_timeout_ms=10000,
        retry_interval_ms=1000,
        scroll_settle_ms=100,
    )
