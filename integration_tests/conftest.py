"""Pytest configuration for integration tests (live OpenAI calls)."""

import pytest


def pytest_collection_modifyitems(items):
    """Mark everything under integration_tests/ so ``-m "not integration"`` skips it."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
