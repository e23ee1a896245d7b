"""
Test Helpers Package.

This package provides assertion helpers for UI tests.
"""

from pollwright.helpers.assertions import AssertionMismatchError, UIAssertions

__all__ = ["AssertionMismatchError", "UIAssertions"]
