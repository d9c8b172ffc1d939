"""
Label Indirection - Find form controls through their visible labels.

For input-like element types, the page object's ``label`` strategies are
tried first. A visible label whose ``for`` attribute is set gives the id of
the control, which is bound as ``loc.auto.forId`` so field strategies can
target it directly.
"""

from typing import FrozenSet
import logging

from pattern_locator.engine.chain_evaluator import ChainEvaluator
from pattern_locator.engine.context import ResolutionContext
from pattern_locator.engine.strategy_resolver import StrategyResolver
from pattern_locator.interfaces.browser import IPage

logger = logging.getLogger(__name__)

LABEL_ELIGIBLE_TYPES: FrozenSet[str] = frozenset({"input", "select", "textarea"})
LABEL_TYPE = "label"


def is_label_eligible(element_type: str) -> bool:
    return element_type.strip().lower() in LABEL_ELIGIBLE_TYPES


class LabelIndirection:
    """Runs the label pass for one attempt."""

    def __init__(self, strategies: StrategyResolver, evaluator: ChainEvaluator):
        self.strategies = strategies
        self.evaluator = evaluator

    async def capture(self, page: IPage, ctx: ResolutionContext) -> str:
        """
        Try each label strategy until one yields an indirection value.

        Does nothing when the element type is not eligible or a value was
        already captured during this call.

        Returns:
            The captured value, or empty if none was found
        """
        if not is_label_eligible(ctx.element_type) or ctx.for_id:
            return ctx.for_id

        labels = self.strategies.field_strategies(ctx, LABEL_TYPE, warn_if_missing=False)
        for label in labels:
            if not label.strip():
                continue
            ctx.record_attempt(label)
            result = await self.evaluator.evaluate(
                page,
                ctx.location_locator,
                ctx.section_locator,
                label,
                is_label_check=True,
            )
            if result.exists and result.indirection:
                ctx.capture_for_id(result.indirection)
                logger.debug(f"Label '{label}' points at id '{result.indirection}'")
                return result.indirection

        return ""
