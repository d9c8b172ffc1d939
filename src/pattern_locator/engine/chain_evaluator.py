"""
Chain Evaluator - Locate a field inside its location and section in one round trip.

The whole lookup (location, then section, then field, then the visibility
test) runs as a single script inside the page so the DOM cannot change
between steps. The result is the serialized chain ``location >> section >>
field`` that the page's own locator engine can turn back into a handle.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from pattern_locator.interfaces.browser import IPage

logger = logging.getLogger(__name__)


# Evaluated with a single argument object, returns {chain, indirection, error}
CHAIN_LOOKUP_JS = r'''
(args) => {
    const { locationLocator, sectionLocator, fieldLocator, isLabelCheck, indirectionAttribute } = args;

    function isPathQuery(selector) {
        return selector.startsWith('//') || selector.startsWith('(');
    }

    // Chained XPath parts are evaluated relative to the previous match
    function relative(selector) {
        if (selector.startsWith('(//')) return '(.' + selector.slice(1);
        if (selector.startsWith('//')) return '.' + selector;
        return selector;
    }

    function queryStep(context, step) {
        const selector = step.trim();
        if (!selector) return null;
        if (isPathQuery(selector)) {
            const expression = context === document ? selector : relative(selector);
            const result = document.evaluate(
                expression, context, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null
            );
            return result.singleNodeValue;
        }
        let el = context.querySelector(selector);
        if (!el && context instanceof Element && context.shadowRoot) {
            el = context.shadowRoot.querySelector(selector);
        }
        return el;
    }

    function query(context, selector) {
        let current = context;
        for (const step of selector.split('>>')) {
            current = queryStep(current, step);
            if (!current) return null;
        }
        return current;
    }

    function isVisible(el) {
        if (!(el instanceof Element)) return false;
        if (el.getClientRects().length === 0) return false;
        const style = window.getComputedStyle(el);
        return style.display !== 'none' && style.visibility !== 'hidden';
    }

    const miss = { chain: '', indirection: '', error: '' };
    try {
        let context = document;
        const parts = [];
        for (const scope of [locationLocator, sectionLocator]) {
            if (!scope) continue;
            const el = query(context, scope);
            if (!el) return miss;
            context = el;
            parts.push(scope.trim());
        }

        const fieldEl = query(context, fieldLocator);
        if (!fieldEl || !isVisible(fieldEl)) return miss;
        parts.push(fieldLocator.trim());

        const indirection = isLabelCheck
            ? (fieldEl.getAttribute(indirectionAttribute) || '')
            : '';
        return { chain: parts.join(' >> '), indirection: indirection, error: '' };
    } catch (e) {
        return { chain: '', indirection: '', error: String(e && e.message ? e.message : e) };
    }
}
'''


@dataclass
class LocatorResult:
    """
    Outcome of one chain evaluation.

    ``exists`` and ``visible`` are the same test; ``enabled`` is not
    checked independently and mirrors ``exists``.
    """
    selector: str = ""
    exists: bool = False
    visible: bool = False
    enabled: bool = False
    indirection: str = ""

    @classmethod
    def not_found(cls) -> "LocatorResult":
        return cls()

    @classmethod
    def found(cls, selector: str, indirection: str = "") -> "LocatorResult":
        return cls(
            selector=selector,
            exists=True,
            visible=True,
            enabled=True,
            indirection=indirection,
        )


class ChainEvaluator:
    """
    Runs the chain lookup script against a page.

    Never raises for lookup failures: a closed page, an invalid selector or
    a script error all produce ``LocatorResult.not_found()`` and a log line.
    """

    def __init__(self, indirection_attribute: str = "for"):
        self.indirection_attribute = indirection_attribute

    async def evaluate(
        self,
        page: IPage,
        location: str,
        section: str,
        field: str,
        is_label_check: bool = False,
    ) -> LocatorResult:
        """
        Evaluate ``location >> section >> field`` on the page.

        Args:
            page: Live page
            location: Location selector, or empty
            section: Section selector, or empty
            field: Field selector (may itself be a ``>>`` chain)
            is_label_check: Also read the indirection attribute

        Returns:
            LocatorResult describing the first visible match
        """
        if page.is_closed():
            logger.warning("Cannot evaluate locator: page is already closed")
            return LocatorResult.not_found()

        logger.debug(
            f"Evaluating location={location!r} section={section!r} "
            f"field={field!r} label_check={is_label_check}"
        )

        args: Dict[str, Any] = {
            "locationLocator": location or None,
            "sectionLocator": section or None,
            "fieldLocator": field,
            "isLabelCheck": is_label_check,
            "indirectionAttribute": self.indirection_attribute,
        }

        try:
            raw: Optional[Dict[str, Any]] = await page.evaluate(CHAIN_LOOKUP_JS, args)
        except Exception as e:
            logger.warning(f"Failed to evaluate locator {field!r}: {e}")
            return LocatorResult.not_found()

        if not raw:
            return LocatorResult.not_found()

        if raw.get("error"):
            logger.warning(f"Locator {field!r} could not be evaluated: {raw['error']}")
            return LocatorResult.not_found()

        chain = raw.get("chain") or ""
        if not chain:
            logger.debug(f"No visible match for {field!r}")
            return LocatorResult.not_found()

        return LocatorResult.found(chain, raw.get("indirection") or "")
