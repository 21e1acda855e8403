"""Pytest configuration for the end-to-end pipeline tests."""

import pytest


def pytest_collection_modifyitems(config, items):
    """Mark everything collected from this directory as integration."""
    for item in items:
        if "integration_tests" in item.path.parts:
            item.add_marker(pytest.mark.integration)
