"""Pytest configuration for QnA Toolkit."""

import pytest

from qna_toolkit.config import set_config


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add custom markers
    config.addinivalue_line("markers", "qna: mark test as deletion workflow test")


@pytest.fixture(autouse=True)
def reset_global_config():
    """Reload the global configuration for every test."""
    set_config(None)
    yield
    set_config(None)
