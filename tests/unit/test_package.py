"""
Tests for the top-level package.
"""

import pattern_locator
from pattern_locator.engine.orchestrator import ResolvedLocator


class TestPublicAPI:
    """Importing the package exposes the documented names."""

    def test_exports_importable(self):
        for name in pattern_locator.__all__:
            assert hasattr(pattern_locator, name), name

    def test_version(self):
        assert pattern_locator.__version__ == "0.1.0"

    def test_resolved_locator_defaults(self):
        resolved = ResolvedLocator(selector="//a")

        assert resolved.reference is None
        assert resolved.strategies_tried == []
        assert "unresolved" in str(resolved)
