"""
Resolution Orchestrator - Drive one logical field reference to a live locator.

Flow for a single call:

    INIT -> WAIT_LOAD -> LABEL_ATTEMPT -> FIELD_ATTEMPT
         -> SUCCESS | SCROLL_AND_RETRY (back to LABEL_ATTEMPT) | TIMEOUT

A closed page ends the call at any point (SESSION_CLOSED), and a page object
with no strategies for the element type ends it without waiting
(NO_STRATEGIES). Only configuration errors raise; every other outcome is
reported on the returned ResolvedLocator.

Example:
    >>> store = VariableStore()
    >>> load_page_objects(store, "resources/locators/pattern")
    >>> resolver = PatternResolver(store, ResolverSettings(default_pattern="loginPage"))
    >>> resolved = await resolver.resolve(page, "button", "{Login Form} Submit")
    >>> if resolved.is_resolved:
    ...     await resolved.locator.click()
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional
import time
import logging

from pattern_locator.config.settings import ResolverSettings
from pattern_locator.engine.chain_evaluator import ChainEvaluator
from pattern_locator.engine.context import ResolutionContext
from pattern_locator.engine.field_reference import FieldReference
from pattern_locator.engine.label_indirection import LabelIndirection
from pattern_locator.engine.page_object import select_page_object
from pattern_locator.engine.scroll_controller import ScrollController
from pattern_locator.engine.strategy_resolver import StrategyResolver, apply_instance
from pattern_locator.interfaces.browser import ILocator, IPage
from pattern_locator.variables.store import VariableStore

logger = logging.getLogger(__name__)


class ResolutionOutcome(Enum):
    """How a resolution call ended."""
    RESOLVED = "resolved"               # Visible match found by the pattern engine
    TIMEOUT = "timeout"                 # Budget exhausted without a match
    NO_STRATEGIES = "no_strategies"     # Page object defines nothing for the type
    SESSION_CLOSED = "session_closed"   # Page torn down mid-call
    SKIPPED = "skipped"                 # Caller opted out of checking
    DIRECT = "direct"                   # Selector used as given, no pattern lookup


@dataclass
class ResolvedLocator:
    """Result of resolving a field reference."""
    selector: str
    locator: Optional[ILocator] = None
    outcome: ResolutionOutcome = ResolutionOutcome.RESOLVED
    pattern_code: str = ""
    element_type: str = ""
    reference: Optional[FieldReference] = None
    attempts: int = 0
    strategies_tried: List[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    for_id: str = ""

    @property
    def is_resolved(self) -> bool:
        return self.locator is not None

    def __str__(self) -> str:
        if self.is_resolved:
            return f"{self.selector} ({self.outcome.value})"
        return f"<unresolved {self.element_type} '{self.reference.raw if self.reference else ''}': {self.outcome.value}>"


class PatternResolver:
    """
    Resolves logical field references against page-object strategy tables.

    One instance can serve many pages concurrently; all per-call state lives
    in a ResolutionContext created by ``resolve``.
    """

    def __init__(
        self,
        store: VariableStore,
        settings: Optional[ResolverSettings] = None,
        evaluator: Optional[ChainEvaluator] = None,
        scroller: Optional[ScrollController] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            store: Variable store holding the loaded page objects
            settings: Resolver settings (defaults when omitted)
            evaluator: Chain evaluator (built from settings when omitted)
            scroller: Scroll controller (built from settings when omitted)
            clock: Monotonic clock in seconds
        """
        self.store = store
        self.settings = settings or ResolverSettings()
        self.evaluator = evaluator or ChainEvaluator(self.settings.indirection_attribute)
        self.scroller = scroller or ScrollController(
            step_px=self.settings.scroll_step_px,
            settle_ms=self.settings.scroll_settle_ms,
            max_steps=self.settings.max_scroll_steps,
        )
        self.strategies = StrategyResolver()
        self.labels = LabelIndirection(self.strategies, self.evaluator)
        self.clock = clock

    async def resolve(
        self,
        page: IPage,
        element_type: str,
        raw_field: str,
        override_pattern: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> ResolvedLocator:
        """
        Resolve a logical field reference to a live locator.

        Args:
            page: Live page
            element_type: Strategy table key (button, input, link, ...)
            raw_field: Field reference such as ``{Login Form} Submit[2]``
            override_pattern: Page object code to use instead of URL mapping
            timeout_ms: Time budget for this call (settings default when None)

        Returns:
            ResolvedLocator; ``is_resolved`` tells whether a handle was found

        Raises:
            PatternCodeNotFoundError: If no page object can be selected
        """
        namespace = select_page_object(
            override=override_pattern,
            url=page.url,
            page_mapping=self.settings.page_mapping,
            default=self.settings.default_pattern,
        )
        ctx = ResolutionContext.create(element_type, raw_field, namespace, self.store, self.clock)
        timeout = self.settings.retry_timeout_ms if timeout_ms is None else timeout_ms

        logger.info(
            f"Resolving {ctx.element_type} '{ctx.field.field_name}' "
            f"(instance {ctx.field.instance}) with page object '{namespace.pattern_code}'"
        )
        try:
            return await self._run(page, ctx, timeout)
        finally:
            ctx.reset()

    async def _run(self, page: IPage, ctx: ResolutionContext, timeout_ms: int) -> ResolvedLocator:
        if page.is_closed():
            return self._closed(ctx)

        try:
            await page.wait_for_load_state("load")
        except Exception as e:
            if page.is_closed():
                return self._closed(ctx)
            logger.warning(f"Waiting for page load failed, resolving anyway: {e}")

        ctx.location_locator = self.strategies.location_locator(ctx)
        ctx.section_locator = self.strategies.section_locator(ctx)

        while True:
            if page.is_closed():
                return self._closed(ctx)

            attempt = ctx.begin_attempt()
            await self.labels.capture(page, ctx)
            if page.is_closed():
                return self._closed(ctx)

            strategies = [
                strategy for strategy in self.strategies.field_strategies(ctx, ctx.element_type)
                if strategy.strip()
            ]
            if not strategies:
                return self._result(ctx, ResolutionOutcome.NO_STRATEGIES)

            for strategy in strategies:
                selector = apply_instance(strategy, ctx.field.instance, ctx.is_scoped)
                ctx.record_attempt(selector)
                found = await self.evaluator.evaluate(
                    page, ctx.location_locator, ctx.section_locator, selector,
                )
                if found.exists:
                    logger.info(
                        f"Resolved '{ctx.field.field_name}' to {found.selector} "
                        f"(attempt {attempt}, {ctx.elapsed_ms:.0f}ms)"
                    )
                    return self._result(
                        ctx,
                        ResolutionOutcome.RESOLVED,
                        selector=found.selector,
                        locator=page.locator(found.selector),
                    )
                if page.is_closed():
                    return self._closed(ctx)

            if ctx.elapsed_ms >= timeout_ms:
                break

            logger.debug(f"Attempt {attempt} found nothing, scrolling before retry")
            await self.scroller.scroll(page, self.strategies.scroll_targets(ctx))
            if page.is_closed():
                return self._closed(ctx)
            try:
                await page.wait_for_timeout(self.settings.retry_interval_ms)
            except Exception as e:
                if page.is_closed():
                    return self._closed(ctx)
                logger.debug(f"Retry wait interrupted: {e}")

        logger.warning(
            f"Element '{ctx.field.raw or ctx.field.field_name}' ({ctx.element_type}) not found "
            f"after {ctx.attempt} attempt(s) in {ctx.elapsed_ms:.0f}ms. "
            f"Tried: {', '.join(ctx.strategies_tried) or 'nothing'}"
        )
        return self._result(ctx, ResolutionOutcome.TIMEOUT)

    def _closed(self, ctx: ResolutionContext) -> ResolvedLocator:
        logger.warning(f"Page closed while resolving '{ctx.field.field_name}'")
        return self._result(ctx, ResolutionOutcome.SESSION_CLOSED)

    def _result(
        self,
        ctx: ResolutionContext,
        outcome: ResolutionOutcome,
        selector: str = "",
        locator: Optional[ILocator] = None,
    ) -> ResolvedLocator:
        return ResolvedLocator(
            selector=selector,
            locator=locator,
            outcome=outcome,
            pattern_code=ctx.namespace.pattern_code,
            element_type=ctx.element_type,
            reference=ctx.field,
            attempts=ctx.attempt,
            strategies_tried=list(ctx.strategies_tried),
            elapsed_ms=ctx.elapsed_ms,
            for_id=ctx.for_id,
        )
