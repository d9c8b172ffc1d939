"""
Locator Resolver - Single entry point for every selector a test step passes in.

Routing (first rule that applies wins):
1. ``xpath=`` / ``css=`` prefixed: raw locator, prefix stripped
2. ``chain=`` prefixed: raw locator, prefix stripped
3. XPath, CSS or ``>>`` chained selector: used as-is
4. ``loc.json.<file>.<page>.<field>``: looked up in a JSON locator file
5. ``-no-check-`` override: skipped, no handle
6. Pattern engine disabled: used as-is
7. Otherwise: logical field reference resolved by the pattern engine
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json
import re
import logging

from pattern_locator.config.settings import Settings
from pattern_locator.engine.orchestrator import (
    PatternResolver,
    ResolutionOutcome,
    ResolvedLocator,
)
from pattern_locator.exceptions import InvalidLocatorError
from pattern_locator.interfaces.browser import IPage
from pattern_locator.variables.patterns import load_page_objects
from pattern_locator.variables.store import VariableStore

logger = logging.getLogger(__name__)

NO_CHECK = "-no-check-"
RESOURCE_PREFIX = "loc."
JSON_RESOURCE_PREFIX = "loc.json."

_ENGINE_PREFIX = re.compile(r"^(?:xpath|css)\s?=\\?")
_CHAIN_PREFIX = re.compile(r"^chain\s?=")


def is_direct_selector(selector: str) -> bool:
    """Whether a selector is XPath, CSS or a chain rather than a field name."""
    if selector.startswith(RESOURCE_PREFIX):
        return False
    stripped = selector.strip()
    is_xpath = stripped.startswith("//") or stripped.startswith("(")
    is_css = ">" in selector or selector.startswith(".") or "#" in selector
    return is_xpath or is_css or ">>" in selector


class LocatorResolver:
    """
    Routes selectors to direct locators, JSON resources or the pattern engine.

    Example:
        >>> resolver = LocatorResolver.from_settings(get_settings())
        >>> resolved = await resolver.resolve(page, "input", "{Login Form} Username")
        >>> await resolved.locator.fill("admin")
    """

    def __init__(
        self,
        store: VariableStore,
        settings: Optional[Settings] = None,
        pattern_resolver: Optional[PatternResolver] = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self.pattern_resolver = pattern_resolver or PatternResolver(store, self.settings.resolver)
        self._json_cache: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def from_settings(cls, settings: Settings, store: Optional[VariableStore] = None) -> "LocatorResolver":
        """Create a resolver and load every page object from the configured directory."""
        store = store if store is not None else VariableStore()
        load_page_objects(store, settings.patterns.patterns_dir)
        return cls(store, settings)

    async def resolve(
        self,
        page: IPage,
        element_type: str,
        selector: str,
        override_pattern: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> ResolvedLocator:
        """
        Resolve any supported selector form to a locator.

        Args:
            page: Live page
            element_type: Strategy table key for logical field references
            selector: Raw selector, resource locator or field reference
            override_pattern: Page object code, or ``-no-check-`` to skip
            timeout_ms: Time budget for pattern resolution

        Returns:
            ResolvedLocator

        Raises:
            InvalidLocatorError: For malformed or unknown ``loc.`` references
            PatternCodeNotFoundError: If the pattern engine has no page object
        """
        logger.debug(f"Resolving locator: {selector}")

        if _ENGINE_PREFIX.match(selector):
            raw = _ENGINE_PREFIX.sub("", selector, count=1).replace("\\/", "/")
            logger.debug("Engine-prefixed selector, returning raw locator")
            return self._direct(page, element_type, raw)

        if _CHAIN_PREFIX.match(selector):
            raw = _CHAIN_PREFIX.sub("", selector, count=1)
            logger.debug("Chain-prefixed selector, returning raw locator")
            return self._direct(page, element_type, raw)

        if is_direct_selector(selector):
            return self._direct(page, element_type, selector)

        if selector.startswith(RESOURCE_PREFIX):
            return self._direct(page, element_type, self._resource_locator(selector))

        if override_pattern and override_pattern.lower() == NO_CHECK:
            logger.info(f"'{NO_CHECK}' set, skipping resolution of '{selector}'")
            return ResolvedLocator(
                selector=selector,
                outcome=ResolutionOutcome.SKIPPED,
                element_type=element_type,
            )

        if not self.settings.resolver.enable:
            return self._direct(page, element_type, selector)

        return await self.pattern_resolver.resolve(
            page,
            element_type,
            selector,
            override_pattern=override_pattern,
            timeout_ms=timeout_ms,
        )

    def _direct(self, page: IPage, element_type: str, selector: str) -> ResolvedLocator:
        return ResolvedLocator(
            selector=selector,
            locator=page.locator(selector),
            outcome=ResolutionOutcome.DIRECT,
            element_type=element_type,
        )

    def _resource_locator(self, selector: str) -> str:
        """Look up a ``loc.json.<file>.<page>.<field>`` reference."""
        if not selector.startswith(JSON_RESOURCE_PREFIX):
            raise InvalidLocatorError(
                f"Unknown locator source in '{selector}'. "
                "Expected loc.json.<file>.<page>.<field>",
                selector=selector,
            )

        parts = selector[len(JSON_RESOURCE_PREFIX):].split(".")
        if len(parts) != 3 or not all(parts):
            raise InvalidLocatorError(
                f"Invalid locator format '{selector}'. Expected loc.json.<file>.<page>.<field>",
                selector=selector,
            )

        file_name, page_name, field_name = parts
        locators = self._load_json(file_name, selector)

        page_obj = locators.get(page_name)
        if not isinstance(page_obj, dict):
            raise InvalidLocatorError(
                f"Page '{page_name}' not found in {file_name}.json",
                selector=selector,
            )

        value = page_obj.get(field_name)
        if not value or not isinstance(value, str):
            raise InvalidLocatorError(
                f"Field '{field_name}' not found in {file_name}.json[{page_name}]",
                selector=selector,
            )

        resolved = self.store.substitute(value)
        logger.info(f"Resolved {selector} -> {resolved}")
        return resolved

    def _load_json(self, file_name: str, selector: str) -> Dict[str, Any]:
        if file_name in self._json_cache:
            return self._json_cache[file_name]

        path = Path(self.settings.patterns.locators_dir) / f"{file_name}.json"
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise InvalidLocatorError(f"Locator file not found: {path}", selector=selector)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidLocatorError(f"Could not read locator file {path}: {e}", selector=selector)

        if not isinstance(data, dict):
            raise InvalidLocatorError(f"Locator file {path} must contain an object", selector=selector)

        self._json_cache[file_name] = data
        return data
