"""
Variables module - Shared variable store and page-object pattern loading.
"""

from pattern_locator.variables.store import (
    VariableStore,
    VariableScope,
    substitute_placeholders,
)
from pattern_locator.variables.patterns import (
    load_pattern_file,
    load_page_objects,
    flatten,
    verify_pattern_file,
)

__all__ = [
    "VariableStore",
    "VariableScope",
    "substitute_placeholders",
    "load_pattern_file",
    "load_page_objects",
    "flatten",
    "verify_pattern_file",
]
