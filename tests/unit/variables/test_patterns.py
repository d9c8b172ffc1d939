"""
Tests for pattern file loading and verification.
"""

from pathlib import Path

import pytest

from pattern_locator.exceptions import PatternFileError
from pattern_locator.variables.patterns import (
    flatten,
    load_page_objects,
    load_pattern_file,
    pattern_code_from_path,
    verify_pattern_file,
)
from pattern_locator.variables.store import VariableStore


LOGIN_YAML = """
pageObject: loginPage
fields:
  button:
    - "//button[text()='#{loc.auto.fieldName}']"
    - "button[aria-label='#{loc.auto.fieldName}']"
  label: "//label[text()='#{loc.auto.fieldName}']"
sections:
  Login Form: "//form[@id='login']"
locations:
  Header: "header"
scroll:
  - "main"
  - "//aside[1]"
"""


def write(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.write_text(content)
    return path


class TestLoadPatternFile:
    """Reading one pattern file."""

    def test_lists_joined_in_order(self, tmp_path):
        code, table = load_pattern_file(write(tmp_path, "loginPage.pattern.yaml", LOGIN_YAML))

        assert code == "loginPage"
        assert table["fields"]["button"] == (
            "//button[text()='#{loc.auto.fieldName}']"
            ";button[aria-label='#{loc.auto.fieldName}']"
        )
        assert table["fields"]["label"] == "//label[text()='#{loc.auto.fieldName}']"
        assert table["sections"]["Login Form"] == "//form[@id='login']"
        assert table["locations"]["Header"] == "header"
        assert table["scroll"] == "main;//aside[1]"

    def test_code_from_file_name_when_missing(self, tmp_path):
        code, _ = load_pattern_file(write(tmp_path, "homePage.pattern.yaml", "fields:\n  link: //a\n"))
        assert code == "homePage"

    def test_empty_file(self, tmp_path):
        code, table = load_pattern_file(write(tmp_path, "blank.pattern.yaml", ""))
        assert code == "blank"
        assert table["fields"] == {}

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(PatternFileError) as exc_info:
            load_pattern_file(write(tmp_path, "bad.pattern.yaml", "- a\n- b\n"))
        assert exc_info.value.path.endswith("bad.pattern.yaml")

    def test_section_must_be_string(self, tmp_path):
        content = "fields:\n  link: //a\nsections:\n  nav:\n    - //nav\n"
        with pytest.raises(PatternFileError):
            load_pattern_file(write(tmp_path, "p.pattern.yaml", content))

    def test_field_list_of_strings_only(self, tmp_path):
        content = "fields:\n  link:\n    - 1\n    - //a\n"
        with pytest.raises(PatternFileError):
            load_pattern_file(write(tmp_path, "p.pattern.yaml", content))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(PatternFileError):
            load_pattern_file(write(tmp_path, "p.pattern.yaml", "fields: [unclosed\n"))

    def test_code_from_path(self):
        assert pattern_code_from_path("a/b/loginPage.pattern.yaml") == "loginPage"
        assert pattern_code_from_path("other.yaml") == "other"


class TestFlatten:
    """Flattening tables to store keys."""

    def test_flatten(self):
        flat = flatten("loginPage", {
            "fields": {"button": "//a;//b"},
            "sections": {"Login Form": "//form"},
            "scroll": "main",
        })
        assert flat == {
            "pattern.loginPage.fields.button": "//a;//b",
            "pattern.loginPage.sections.Login Form": "//form",
            "pattern.loginPage.scroll": "main",
        }


class TestLoadPageObjects:
    """Loading a directory into the store."""

    def test_loads_every_file(self, tmp_path):
        write(tmp_path, "loginPage.pattern.yaml", LOGIN_YAML)
        write(tmp_path, "homePage.pattern.yaml", "pageObject: homePage\nfields:\n  link: //a\n")
        write(tmp_path, "notes.txt", "ignored")
        store = VariableStore()

        codes = load_page_objects(store, tmp_path)

        assert codes == ["homePage", "loginPage"]
        assert store.get("pattern.homePage.fields.link") == "//a"
        assert store.get("pattern.loginPage.scroll") == "main;//aside[1]"

    def test_reload_replaces_table(self, tmp_path):
        path = write(tmp_path, "p.pattern.yaml", "fields:\n  link: //a\n  button: //b\n")
        store = VariableStore()
        load_page_objects(store, tmp_path)

        path.write_text("fields:\n  link: //c\n")
        load_page_objects(store, tmp_path)

        assert store.get("pattern.p.fields.link") == "//c"
        assert "pattern.p.fields.button" not in store

    def test_missing_directory(self, tmp_path, caplog):
        assert load_page_objects(VariableStore(), tmp_path / "nope") == []
        assert "not found" in caplog.text


class TestVerifyPatternFile:
    """Problem reports."""

    def test_valid_file(self, tmp_path):
        assert verify_pattern_file(write(tmp_path, "loginPage.pattern.yaml", LOGIN_YAML)) == []

    def test_missing_page_object(self, tmp_path):
        problems = verify_pattern_file(write(tmp_path, "p.pattern.yaml", "fields:\n  link: //a\n"))
        assert problems == ["missing 'pageObject'"]

    def test_page_object_mismatch(self, tmp_path):
        problems = verify_pattern_file(write(tmp_path, "homePage.pattern.yaml", LOGIN_YAML))
        assert "does not match file name 'homePage'" in problems[0]

    def test_missing_fields(self, tmp_path):
        problems = verify_pattern_file(write(tmp_path, "p.pattern.yaml", "pageObject: p\n"))
        assert problems == ["missing 'fields'"]

    def test_empty_fields(self, tmp_path):
        problems = verify_pattern_file(write(tmp_path, "p.pattern.yaml", "pageObject: p\nfields: {}\n"))
        assert problems == ["'fields' defines no element types"]

    def test_structural_errors_reported(self, tmp_path):
        content = "pageObject: p\nfields:\n  link: //a\nsections:\n  nav:\n    - //nav\n"
        problems = verify_pattern_file(write(tmp_path, "p.pattern.yaml", content))
        assert any("single selector string" in p for p in problems)

    def test_not_a_mapping(self, tmp_path):
        assert verify_pattern_file(write(tmp_path, "p.pattern.yaml", "just text")) == ["top level is not a mapping"]
