"""Pytest fixtures for webapp tests."""

import pytest

from whatif_simulator.webapp import create_app
from whatif_simulator.webapp.config import TestConfig


@pytest.fixture
def app(api):
    """Create test application around a fake-backed API."""
    return create_app(TestConfig, api=api)


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
