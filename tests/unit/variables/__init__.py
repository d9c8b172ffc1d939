"""
Tests for the variables module.
"""
