"""Tests for the engine module."""
