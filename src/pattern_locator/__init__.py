"""
Pattern Locator - Resolve logical field names to live page elements.

Test steps name elements the way a person reads the page ("the Submit
button in the Login Form"). Page-object pattern files hold ordered selector
templates per element type; the engine fills them in, tries them in order
and scrolls between attempts until a visible match is found.

Example:
    >>> from pattern_locator import PatternResolver, VariableStore, load_page_objects
    >>> store = VariableStore()
    >>> load_page_objects(store, "resources/locators/pattern")
    >>> resolver = PatternResolver(store)
    >>> resolved = await resolver.resolve(page, "button", "{Login Form} Submit", "loginPage")
"""

__version__ = "0.1.0"

# Public API exports
from pattern_locator.config.settings import Settings
from pattern_locator.engine.field_reference import FieldReference, parse_field_reference
from pattern_locator.engine.locator_resolver import LocatorResolver
from pattern_locator.engine.orchestrator import (
    PatternResolver,
    ResolutionOutcome,
    ResolvedLocator,
)
from pattern_locator.variables.patterns import load_page_objects
from pattern_locator.variables.store import VariableStore

__all__ = [
    "Settings",
    "FieldReference",
    "parse_field_reference",
    "LocatorResolver",
    "PatternResolver",
    "ResolutionOutcome",
    "ResolvedLocator",
    "load_page_objects",
    "VariableStore",
    "__version__",
]
