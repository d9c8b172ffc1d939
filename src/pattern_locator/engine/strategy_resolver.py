"""
Strategy Resolver - Turn store templates into concrete selector lists.

Looks up the active page object's tables in the variable store,
substitutes runtime bindings and splits ordered strategy lists.
"""

from typing import List, Sequence, Union
import logging

from pattern_locator.engine.context import ResolutionContext
from pattern_locator.variables.patterns import STRATEGY_SEPARATOR

logger = logging.getLogger(__name__)


def split_strategies(value: Union[str, Sequence[str], None]) -> List[str]:
    """
    Split a semicolon-delimited strategy string, preserving order.

    Every part is kept, including empty ones. A value that is already a
    list is returned as-is.

    Example:
        >>> split_strategies("//a;//b")
        ['//a', '//b']
        >>> split_strategies(['//a', '//b'])
        ['//a', '//b']
    """
    if value is None:
        return []
    if isinstance(value, str):
        return value.split(STRATEGY_SEPARATOR)
    return list(value)


def is_path_query(selector: str) -> bool:
    """XPath when it starts with ``//`` or ``(``, otherwise CSS."""
    stripped = selector.strip()
    return stripped.startswith("//") or stripped.startswith("(")


def apply_instance(selector: str, instance: int, scoped: bool) -> str:
    """
    Wrap an XPath strategy as ``(selector)[n]``.

    Only applied to un-scoped XPath that is neither grouped already nor
    chained with ``>>``. Everything else is returned unchanged.
    """
    stripped = selector.strip()
    if scoped or not stripped.startswith("//") or ">>" in stripped:
        return selector
    return f"({stripped})[{instance}]"


class StrategyResolver:
    """
    Resolves strategy templates for one resolution context.

    A missing table entry is reported as an empty list and a warning;
    deciding what that means is left to the orchestrator.
    """

    def _lookup(self, ctx: ResolutionContext, key: str) -> str:
        """Template for a key, or empty when the store does not know it."""
        value = ctx.variables.get(key)
        if value == key:
            return ""
        return value.strip()

    def field_strategies(
        self,
        ctx: ResolutionContext,
        element_type: str,
        warn_if_missing: bool = True,
    ) -> List[str]:
        """
        Get the ordered, substituted strategies for an element type.

        Args:
            ctx: Current resolution context
            element_type: Table key such as ``button`` or ``label``
            warn_if_missing: Log a warning when the table has no entry

        Returns:
            Strategies in table order; empty when none are configured
        """
        element_type = element_type.strip()
        cached = ctx.cached_split(element_type)
        if cached is not None:
            return cached

        key = ctx.namespace.field_key(element_type)
        template = self._lookup(ctx, key)
        if not template:
            if warn_if_missing:
                logger.warning(
                    f"No '{element_type}' strategies defined for page object "
                    f"'{ctx.namespace.pattern_code}' (key {key})"
                )
            strategies: List[str] = []
        else:
            strategies = split_strategies(ctx.variables.substitute(template))

        ctx.cache_split(element_type, strategies)
        return strategies

    def section_locator(self, ctx: ResolutionContext) -> str:
        name = ctx.field.section_name
        if not name:
            return ""
        template = self._lookup(ctx, ctx.namespace.section_key(name))
        if not template:
            logger.debug(f"Section '{name}' is not defined for '{ctx.namespace.pattern_code}'")
            return ""
        return ctx.variables.substitute(template)

    def location_locator(self, ctx: ResolutionContext) -> str:
        name = ctx.field.location_name
        if not name:
            return ""
        template = self._lookup(ctx, ctx.namespace.location_key(name))
        if not template:
            logger.debug(f"Location '{name}' is not defined for '{ctx.namespace.pattern_code}'")
            return ""
        return ctx.variables.substitute(template)

    def scroll_targets(self, ctx: ResolutionContext) -> List[str]:
        """Trimmed, non-empty scroll container selectors."""
        template = self._lookup(ctx, ctx.namespace.scroll_key)
        if not template:
            return []
        parts = split_strategies(ctx.variables.substitute(template))
        return [part.strip() for part in parts if part.strip()]
