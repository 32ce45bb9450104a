"""Pytest configuration and shared fixtures for jsreq tests."""

import pytest

# Import all fixtures from fixtures module to make them available globally
from tests.fixtures import FakeParserFactory, tmp_project

__all__ = [
    "FakeParserFactory",
    "tmp_project",
]
