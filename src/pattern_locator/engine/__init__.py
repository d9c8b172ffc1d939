"""
Engine module - Pattern-based element resolution.

Components:
- field_reference: Parses ``{{Location}} {Section} Field[n]`` strings
- page_object: Selects the active page object for a call
- strategy_resolver: Substitutes and splits strategy templates
- chain_evaluator: Finds a visible match in one page round trip
- label_indirection: Resolves form controls through their labels
- scroll_controller: Reveals lazily rendered content between attempts
- orchestrator: Drives the retry loop to a ResolvedLocator
- locator_resolver: Front door for every selector form
"""

from pattern_locator.engine.field_reference import (
    FieldReference,
    FieldReferenceParser,
    parse_field_reference,
)
from pattern_locator.engine.page_object import (
    NamespaceSource,
    PageObjectNamespace,
    select_page_object,
)
from pattern_locator.engine.context import ResolutionContext
from pattern_locator.engine.strategy_resolver import (
    StrategyResolver,
    apply_instance,
    is_path_query,
    split_strategies,
)
from pattern_locator.engine.chain_evaluator import ChainEvaluator, LocatorResult
from pattern_locator.engine.label_indirection import (
    LABEL_ELIGIBLE_TYPES,
    LabelIndirection,
    is_label_eligible,
)
from pattern_locator.engine.scroll_controller import ScrollController
from pattern_locator.engine.orchestrator import (
    PatternResolver,
    ResolutionOutcome,
    ResolvedLocator,
)
from pattern_locator.engine.locator_resolver import LocatorResolver, is_direct_selector

__all__ = [
    "FieldReference",
    "FieldReferenceParser",
    "parse_field_reference",
    "NamespaceSource",
    "PageObjectNamespace",
    "select_page_object",
    "ResolutionContext",
    "StrategyResolver",
    "apply_instance",
    "is_path_query",
    "split_strategies",
    "ChainEvaluator",
    "LocatorResult",
    "LABEL_ELIGIBLE_TYPES",
    "LabelIndirection",
    "is_label_eligible",
    "ScrollController",
    "PatternResolver",
    "ResolutionOutcome",
    "ResolvedLocator",
    "LocatorResolver",
    "is_direct_selector",
]
