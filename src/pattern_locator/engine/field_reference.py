"""
Field Reference Parser - Parse logical field strings.

Grammar (each part optional except the field name):

    {{Location[::value]}} {Section[::value]} Field Name[instance]

Examples:
    "Submit"                              -> field "Submit"
    "Submit[2]"                           -> field "Submit", instance 2
    "{Login Form} Password"               -> section "Login Form"
    "{{Header}} {nav:: main} Home"        -> location "Header", section "nav" = "main"

Escapes: a leading slash makes a delimiter literal, so ``/{{``, ``/{`` and
``/[`` appear in the field name as ``{{``, ``{`` and ``[``. Escapes are
masked before parsing and restored afterwards.

Parsing never raises. Input that does not fit the grammar becomes a plain
field name with instance 1.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple
import re
import logging

logger = logging.getLogger(__name__)

# Runtime binding keys available to strategy templates as #{key}
FIELD_NAME_KEY = "loc.auto.fieldName"
FIELD_NAME_LOWER_KEY = "loc.auto.fieldName.toLowerCase"
FIELD_INSTANCE_KEY = "loc.auto.fieldInstance"
FOR_ID_KEY = "loc.auto.forId"
LOCATION_NAME_KEY = "loc.auto.location.name"
LOCATION_VALUE_KEY = "loc.auto.location.value"
SECTION_NAME_KEY = "loc.auto.section.name"
SECTION_VALUE_KEY = "loc.auto.section.value"

# Longest escape first so "/{{" is not read as "/{" + "{"
_ESCAPES = (
    ("/{{", "\ue000", "{{"),
    ("/{", "\ue001", "{"),
    ("/[", "\ue002", "["),
)


@dataclass(frozen=True)
class FieldReference:
    """A parsed logical field reference."""
    field_name: str
    instance: int = 1
    location_name: str = ""
    location_value: str = ""
    section_name: str = ""
    section_value: str = ""
    raw: str = ""

    @property
    def is_scoped(self) -> bool:
        """True when a location or section narrows the search."""
        return bool(self.location_name or self.section_name)

    def bindings(self) -> Dict[str, str]:
        """Runtime bindings published for strategy templates."""
        return {
            FIELD_NAME_KEY: self.field_name,
            FIELD_NAME_LOWER_KEY: self.field_name.lower(),
            FIELD_INSTANCE_KEY: str(self.instance),
            LOCATION_NAME_KEY: self.location_name,
            LOCATION_VALUE_KEY: self.location_value,
            SECTION_NAME_KEY: self.section_name,
            SECTION_VALUE_KEY: self.section_value,
        }


class FieldReferenceParser:
    """
    Recursive-descent style parser with one rule per grammar group.

    Example:
        >>> FieldReferenceParser().parse("{{Main}} {Login Form} Submit[2]")
        FieldReference(field_name='Submit', instance=2, location_name='Main', ...)
    """

    LOCATION_GROUP = re.compile(r"\{\{(?P<name>[^:}]+)(?:::(?P<value>.+?))?\}\}\s*")
    SECTION_GROUP = re.compile(r"\{(?P<name>[^:}]+)(?:::(?P<value>.+?))?\}\s*")
    INSTANCE_SUFFIX = re.compile(r"\[(?P<instance>[1-9]\d*)\]$")

    def parse(self, raw: str) -> FieldReference:
        text = (raw or "").strip()
        masked = self._mask(text)

        pos = 0
        location_name, location_value, pos = self._group(self.LOCATION_GROUP, masked, pos)
        section_name, section_value, pos = self._group(self.SECTION_GROUP, masked, pos)
        field_name, instance = self._field(masked[pos:])

        if not field_name:
            logger.debug(f"Field reference '{text}' does not match the grammar, using it literally")
            return FieldReference(field_name=self._unmask(text), raw=text)

        return FieldReference(
            field_name=self._unmask(field_name),
            instance=instance,
            location_name=self._unmask(location_name),
            location_value=self._unmask(location_value),
            section_name=self._unmask(section_name),
            section_value=self._unmask(section_value),
            raw=text,
        )

    def _group(self, rule: re.Pattern, text: str, pos: int) -> Tuple[str, str, int]:
        match = rule.match(text, pos)
        if not match:
            return "", "", pos
        value = match.group("value") or ""
        return match.group("name").strip(), value.strip(), match.end()

    def _field(self, text: str) -> Tuple[str, int]:
        text = text.strip()
        match = self.INSTANCE_SUFFIX.search(text)
        if match:
            return text[:match.start()].strip(), int(match.group("instance"))
        return text, 1

    @staticmethod
    def _mask(text: str) -> str:
        for escape, sentinel, _ in _ESCAPES:
            text = text.replace(escape, sentinel)
        return text

    @staticmethod
    def _unmask(text: str) -> str:
        for _, sentinel, literal in _ESCAPES:
            text = text.replace(sentinel, literal)
        return text


_parser: Optional[FieldReferenceParser] = None


def parse_field_reference(raw: str) -> FieldReference:
    """Parse a field string with the shared parser."""
    global _parser
    if _parser is None:
        _parser = FieldReferenceParser()
    return _parser.parse(raw)
