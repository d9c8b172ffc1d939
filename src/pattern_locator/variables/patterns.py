"""
Pattern files - Load page-object strategy tables into the variable store.

A pattern file is a YAML document named ``<code>.pattern.yaml``:

    pageObject: loginPage
    fields:
      button:
        - "//button[text()='#{loc.auto.fieldName}']"
        - "button[aria-label='#{loc.auto.fieldName}']"
      label: "//label[text()='#{loc.auto.fieldName}']"
    sections:
      Login Form: "//form[@id='login']"
    locations:
      Main Content: "main"
    scroll:
      - "div.scrollable"

Tables are flattened to dot-notation keys under ``pattern.<code>.``.
Ordered lists are stored as one semicolon-delimited string, which is the
form the strategy resolver splits again at lookup time.
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union
import logging

import yaml

from pattern_locator.exceptions import PatternFileError
from pattern_locator.variables.store import PATTERN_PREFIX, VariableStore

logger = logging.getLogger(__name__)

PATTERN_FILE_SUFFIX = ".pattern.yaml"
STRATEGY_SEPARATOR = ";"

_LIST_SECTIONS = ("fields",)
_SINGLE_SECTIONS = ("sections", "locations")


def pattern_code_from_path(path: Union[str, Path]) -> str:
    """``pages/loginPage.pattern.yaml`` -> ``loginPage``."""
    name = Path(path).name
    if name.endswith(PATTERN_FILE_SUFFIX):
        return name[: -len(PATTERN_FILE_SUFFIX)]
    return Path(path).stem


def _join(value: Any, path: Path, where: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return STRATEGY_SEPARATOR.join(value)
    raise PatternFileError(
        f"{where} must be a string or a list of strings",
        path=str(path),
    )


def load_pattern_file(path: Union[str, Path]) -> Tuple[str, Dict[str, Any]]:
    """
    Read and validate one pattern file.

    Args:
        path: Path to a ``*.pattern.yaml`` file

    Returns:
        Tuple of (pattern code, normalized table). Field and scroll entries
        are semicolon-delimited strings; sections and locations are strings.

    Raises:
        PatternFileError: If the file is unreadable or malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise PatternFileError(f"Could not read pattern file: {e}", path=str(path))

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise PatternFileError("Pattern file must contain a mapping", path=str(path))

    code = str(raw.get("pageObject") or pattern_code_from_path(path)).strip()
    table: Dict[str, Any] = {}

    for section in _LIST_SECTIONS + _SINGLE_SECTIONS:
        entries = raw.get(section) or {}
        if not isinstance(entries, dict):
            raise PatternFileError(f"'{section}' must be a mapping", path=str(path))
        if section in _LIST_SECTIONS:
            table[section] = {
                str(name): _join(value, path, f"{section}.{name}")
                for name, value in entries.items()
            }
        else:
            normalized = {}
            for name, value in entries.items():
                if not isinstance(value, str):
                    raise PatternFileError(
                        f"{section}.{name} must be a single selector string",
                        path=str(path),
                    )
                normalized[str(name)] = value
            table[section] = normalized

    if raw.get("scroll"):
        table["scroll"] = _join(raw["scroll"], path, "scroll")

    return code, table


def flatten(code: str, table: Dict[str, Any]) -> Dict[str, str]:
    """
    Flatten a page-object table to store keys.

    Args:
        code: Page-object code
        table: Normalized table from load_pattern_file

    Returns:
        Mapping like ``{"pattern.loginPage.fields.button": "a;b"}``
    """
    prefix = f"{PATTERN_PREFIX}{code}."
    flat: Dict[str, str] = {}

    def walk(node: Any, key: str) -> None:
        if isinstance(node, dict):
            for name, child in node.items():
                walk(child, f"{key}.{name}" if key else str(name))
        else:
            flat[prefix + key] = str(node)

    walk(table, "")
    return flat


def load_page_objects(store: VariableStore, directory: Union[str, Path]) -> List[str]:
    """
    Load every pattern file in a directory into the store.

    A code loaded twice replaces its earlier table.

    Args:
        store: Target variable store
        directory: Directory scanned for ``*.pattern.yaml``

    Returns:
        The loaded page-object codes, in file name order
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning(f"Pattern directory not found: {directory}")
        return []

    codes: List[str] = []
    for path in sorted(directory.glob(f"*{PATTERN_FILE_SUFFIX}")):
        code, table = load_pattern_file(path)
        store.clear(f"{PATTERN_PREFIX}{code}.")
        store.update(flatten(code, table))
        codes.append(code)
        logger.debug(f"Loaded page object '{code}' from {path.name}")

    logger.info(f"Loaded {len(codes)} page object(s) from {directory}")
    return codes


def verify_pattern_file(path: Union[str, Path]) -> List[str]:
    """
    Check a pattern file for common mistakes.

    Args:
        path: Path to a pattern file

    Returns:
        Human-readable problems; empty when the file looks valid
    """
    path = Path(path)
    problems: List[str] = []

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        return [f"cannot be read: {e}"]

    if not isinstance(raw, dict):
        return ["top level is not a mapping"]

    expected = pattern_code_from_path(path)
    declared = raw.get("pageObject")
    if declared is None:
        problems.append("missing 'pageObject'")
    elif str(declared) != expected:
        problems.append(f"pageObject '{declared}' does not match file name '{expected}'")

    fields = raw.get("fields")
    if fields is None:
        problems.append("missing 'fields'")
    elif not isinstance(fields, dict) or not fields:
        problems.append("'fields' defines no element types")

    try:
        load_pattern_file(path)
    except PatternFileError as e:
        problems.append(e.message)

    return problems
