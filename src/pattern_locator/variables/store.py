"""
Variable Store - Process-wide key/value map with placeholder substitution.

Holds flattened page-object tables (``pattern.<code>.fields.<type>`` ...)
alongside any other test variables. Lookups of missing keys return the key
itself, which is how callers tell "absent" apart from "empty".

Runtime bindings produced while resolving one field (field name, instance,
captured label target, ...) never go into the shared map. They live in a
VariableScope layered on top of the store, owned by a single resolution
call and cleared when that call ends.

Example:
    >>> store = VariableStore()
    >>> store.set("baseUrl", "https://example.com")
    >>> store.substitute("#{baseUrl}/login")
    'https://example.com/login'
    >>> scope = store.scope()
    >>> scope.set("loc.auto.fieldName", "Email")
    >>> scope.substitute("//input[@placeholder='#{loc.auto.fieldName}']")
    "//input[@placeholder='Email']"
"""

from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional
import re
import logging

logger = logging.getLogger(__name__)

# #{key}; an empty #{} is left untouched
PLACEHOLDER_PATTERN = re.compile(r"#\{([^}]+)\}")

PATTERN_PREFIX = "pattern."


def substitute_placeholders(template: str, lookup: Callable[[str], str]) -> str:
    """
    Replace every ``#{key}`` in a template using a lookup function.

    Single pass: values are not themselves re-substituted.

    Args:
        template: String containing placeholders
        lookup: Function returning the value for a key

    Returns:
        The substituted string
    """
    if not template or "#{" not in template:
        return template

    def replacer(match: re.Match) -> str:
        return lookup(match.group(1).strip())

    return PLACEHOLDER_PATTERN.sub(replacer, template)


class VariableStore:
    """
    Shared variable map.

    ``get`` returns the key itself when a key is absent; ``substitute``
    therefore renders unknown placeholders as their bare key name.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, str] = {}
        if values:
            self.update(values)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: str) -> str:
        """
        Get a value.

        Args:
            key: Variable key

        Returns:
            The stored value, or the key itself when absent
        """
        return self._values.get(key, key)

    def is_set(self, key: str) -> bool:
        """Whether the key holds a value that is neither empty nor the key itself."""
        value = self._values.get(key)
        return bool(value) and value != key

    def set(self, key: str, value: Any) -> None:
        """Store a value (converted to str)."""
        self._values[key] = "" if value is None else str(value)

    def update(self, values: Mapping[str, Any]) -> None:
        """Store several values at once."""
        for key, value in values.items():
            self.set(key, value)

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        self._values.pop(key, None)

    def keys(self, prefix: str = "") -> Iterator[str]:
        """Iterate keys, optionally only those starting with a prefix."""
        return (key for key in list(self._values) if key.startswith(prefix))

    def clear(self, prefix: str = "") -> None:
        """Remove all keys, or only those starting with a prefix."""
        for key in list(self.keys(prefix)):
            del self._values[key]

    def substitute(self, template: str) -> str:
        """Replace ``#{key}`` placeholders with stored values."""
        return substitute_placeholders(template, self.get)

    def scope(self) -> "VariableScope":
        """Create a per-call binding layer on top of this store."""
        return VariableScope(self)

    def loaded_pattern_codes(self) -> List[str]:
        """
        List page-object codes that have entries in the store.

        Returns:
            Codes in first-loaded order
        """
        codes: List[str] = []
        for key in self.keys(PATTERN_PREFIX):
            code = key[len(PATTERN_PREFIX):].split(".", 1)[0]
            if code and code not in codes:
                codes.append(code)
        return codes


class VariableScope:
    """
    Per-call binding layer.

    Reads fall through to the shared store; writes stay in the scope.
    Clearing the scope drops every binding, leaving the store untouched.
    """

    def __init__(self, store: VariableStore):
        self._store = store
        self._bindings: Dict[str, str] = {}

    @property
    def store(self) -> VariableStore:
        return self._store

    @property
    def bindings(self) -> Dict[str, str]:
        """A copy of the current bindings."""
        return dict(self._bindings)

    def get(self, key: str) -> str:
        if key in self._bindings:
            return self._bindings[key]
        return self._store.get(key)

    def is_set(self, key: str) -> bool:
        if key in self._bindings:
            return bool(self._bindings[key])
        return self._store.is_set(key)

    def set(self, key: str, value: Any) -> None:
        self._bindings[key] = "" if value is None else str(value)

    def substitute(self, template: str) -> str:
        return substitute_placeholders(template, self.get)

    def clear(self) -> None:
        self._bindings.clear()
