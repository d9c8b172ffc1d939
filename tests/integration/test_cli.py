"""
Integration tests for the CLI commands.
"""

import pytest
from typer.testing import CliRunner

from pattern_locator.main import app


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def pattern_dir(tmp_path):
    directory = tmp_path / "patterns"
    directory.mkdir()
    (directory / "loginPage.pattern.yaml").write_text(
        "pageObject: loginPage\n"
        "fields:\n"
        "  button:\n"
        "    - \"//button[text()='#{loc.auto.fieldName}']\"\n"
    )
    return directory


class TestCLIParse:
    """Test the 'parse' CLI command."""

    def test_parse_help(self, runner):
        result = runner.invoke(app, ["parse", "--help"])
        assert result.exit_code == 0
        assert "Show how a field reference is parsed" in result.stdout

    def test_parse_field(self, runner):
        result = runner.invoke(app, ["parse", "{{Header}} {Login Form} Submit[2]"])

        assert result.exit_code == 0
        assert "Header" in result.stdout
        assert "Login Form" in result.stdout
        assert "Submit" in result.stdout
        assert "2" in result.stdout


class TestCLIVerify:
    """Test the 'verify' CLI command."""

    def test_verify_valid_directory(self, runner, pattern_dir):
        result = runner.invoke(app, ["verify", "--dir", str(pattern_dir)])

        assert result.exit_code == 0
        assert "loginPage.pattern.yaml" in result.stdout
        assert "loginPage" in result.stdout

    def test_verify_reports_problems(self, runner, pattern_dir):
        (pattern_dir / "homePage.pattern.yaml").write_text("pageObject: wrongName\n")

        result = runner.invoke(app, ["verify", "--dir", str(pattern_dir)])

        assert result.exit_code == 1
        assert "homePage.pattern.yaml" in result.stdout
        assert "missing 'fields'" in result.stdout

    def test_verify_missing_directory(self, runner, tmp_path):
        result = runner.invoke(app, ["verify", "--dir", str(tmp_path / "nope")])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_verify_empty_directory(self, runner, tmp_path):
        result = runner.invoke(app, ["verify", "--dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "No pattern files" in result.stdout


class TestCLIResolve:
    """Test the 'resolve' CLI command."""

    def test_resolve_help(self, runner):
        result = runner.invoke(app, ["resolve", "--help"])
        assert result.exit_code == 0
        assert "--pattern" in result.stdout
        assert "--timeout" in result.stdout
        assert "--visible" in result.stdout
