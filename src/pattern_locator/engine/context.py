"""
Resolution Context - State owned by a single resolution call.

Created fresh by the orchestrator for every call, threaded explicitly
through the strategy resolver, label indirection and chain evaluation,
and reset on every exit path. Runtime bindings live in the context's own
VariableScope, so nothing written during one call is visible to the next.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import time
import logging

from pattern_locator.engine.field_reference import (
    FOR_ID_KEY,
    FieldReference,
    parse_field_reference,
)
from pattern_locator.engine.page_object import PageObjectNamespace
from pattern_locator.variables.store import VariableScope, VariableStore

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """Mutable per-call state."""
    element_type: str
    field: FieldReference
    namespace: PageObjectNamespace
    variables: VariableScope
    clock: Callable[[], float] = time.monotonic

    location_locator: str = ""
    section_locator: str = ""
    for_id: str = ""
    attempt: int = 0
    started_at: float = 0.0
    strategies_tried: List[str] = field(default_factory=list)

    # Split strategy lists for the current attempt, keyed by element type
    _split_cache: Dict[str, List[str]] = field(default_factory=dict, repr=False)

    @classmethod
    def create(
        cls,
        element_type: str,
        raw_field: str,
        namespace: PageObjectNamespace,
        store: VariableStore,
        clock: Callable[[], float] = time.monotonic,
    ) -> "ResolutionContext":
        """
        Parse the field reference and publish its bindings into a new scope.

        Args:
            element_type: Strategy table key (button, input, ...)
            raw_field: Logical field string
            namespace: Selected page object
            store: Shared variable store the scope reads through to
            clock: Monotonic clock in seconds

        Returns:
            A fresh context with the timer started
        """
        reference = parse_field_reference(raw_field)
        scope = store.scope()
        for key, value in reference.bindings().items():
            scope.set(key, value)
        scope.set(FOR_ID_KEY, "")

        ctx = cls(
            element_type=element_type.strip(),
            field=reference,
            namespace=namespace,
            variables=scope,
            clock=clock,
        )
        ctx.started_at = clock()
        return ctx

    @property
    def elapsed_ms(self) -> float:
        return (self.clock() - self.started_at) * 1000

    @property
    def is_scoped(self) -> bool:
        """True when location or section scoping is active for this call."""
        return self.field.is_scoped

    def begin_attempt(self) -> int:
        """Start a new resolution pass; split results are not reused across passes."""
        self.attempt += 1
        self._split_cache.clear()
        return self.attempt

    def cached_split(self, element_type: str) -> Optional[List[str]]:
        return self._split_cache.get(element_type)

    def cache_split(self, element_type: str, strategies: List[str]) -> None:
        self._split_cache[element_type] = strategies

    def capture_for_id(self, value: str) -> None:
        """Record the label indirection target and bind it for templates."""
        self.for_id = value
        self.variables.set(FOR_ID_KEY, value)

    def record_attempt(self, selector: str) -> None:
        if selector not in self.strategies_tried:
            self.strategies_tried.append(selector)

    def reset(self) -> None:
        """Clear every field and runtime binding."""
        self.variables.clear()
        self.element_type = ""
        self.field = FieldReference(field_name="")
        self.namespace = PageObjectNamespace("")
        self.started_at = 0.0
        self.location_locator = ""
        self.section_locator = ""
        self.for_id = ""
        self.attempt = 0
        self.strategies_tried = []
        self._split_cache.clear()
        logger.debug("Resolution context reset")
