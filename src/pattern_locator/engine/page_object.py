"""
Page Object selection - Decide which strategy table a call resolves against.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional
import logging

from pattern_locator.exceptions import PatternCodeNotFoundError
from pattern_locator.variables.store import PATTERN_PREFIX

logger = logging.getLogger(__name__)


class NamespaceSource(Enum):
    """Where the pattern code came from."""
    OVERRIDE = "override"
    URL = "url"
    DEFAULT = "default"


@dataclass(frozen=True)
class PageObjectNamespace:
    """The active page object and the store keys it owns."""
    pattern_code: str
    source: NamespaceSource = NamespaceSource.DEFAULT

    @property
    def prefix(self) -> str:
        return f"{PATTERN_PREFIX}{self.pattern_code}."

    def field_key(self, element_type: str) -> str:
        return f"{self.prefix}fields.{element_type}"

    def section_key(self, name: str) -> str:
        return f"{self.prefix}sections.{name}"

    def location_key(self, name: str) -> str:
        return f"{self.prefix}locations.{name}"

    @property
    def scroll_key(self) -> str:
        return f"{self.prefix}scroll"


def select_page_object(
    override: Optional[str] = None,
    url: str = "",
    page_mapping: Optional[Mapping[str, str]] = None,
    default: Optional[str] = None,
) -> PageObjectNamespace:
    """
    Pick the page object for one resolution call.

    Priority: explicit override, then the first URL mapping entry whose key
    is a substring of the current URL, then the configured default.

    Args:
        override: Pattern code passed by the caller
        url: Current page URL
        page_mapping: URL substring -> pattern code, in priority order
        default: Configured default pattern code

    Returns:
        The selected namespace

    Raises:
        PatternCodeNotFoundError: If no pattern code can be determined
    """
    if override and override.strip():
        code = override.strip()
        logger.info(f"Using explicit page object override: {code}")
        return PageObjectNamespace(code, NamespaceSource.OVERRIDE)

    if url and page_mapping:
        for url_part, code in page_mapping.items():
            if url_part and code and url_part in url:
                logger.info(f"Auto-detected page object '{code}' for URL pattern '{url_part}'")
                return PageObjectNamespace(code.strip(), NamespaceSource.URL)

    if default and default.strip():
        code = default.strip()
        logger.info(f"Using default page object from configuration: {code}")
        return PageObjectNamespace(code, NamespaceSource.DEFAULT)

    raise PatternCodeNotFoundError(
        "No page object pattern code found. Configure resolver.default_pattern, "
        "add a resolver.page_mapping entry or pass an override.",
        url=url or None,
    )
