"""Shared fixtures for the API and CLI tests."""
from fastapi.testclient import TestClient
import pytest

from catalogue_api.main import create_app
from pattern_catalogue.registry import PatternRegistry


@pytest.fixture
def registry() -> PatternRegistry:
    """Empty registry."""
    return PatternRegistry()


@pytest.fixture
def client() -> TestClient:
    """Client for an app serving the built-in catalogue."""
    return TestClient(create_app())


@pytest.fixture
def custom_client(registry) -> TestClient:
    """Client for an app serving the `registry` fixture."""
    return TestClient(create_app(registry))
