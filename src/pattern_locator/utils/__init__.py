"""
Utilities module - Logging setup.
"""

from pattern_locator.utils.logging import setup_logging

__all__ = [
    "setup_logging",
]
