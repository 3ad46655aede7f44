"""Shared fixtures for the pattern catalogue tests."""
import pytest

from pattern_catalogue.implementations import default_registry
from pattern_catalogue.registry import PatternRegistry
from pattern_catalogue.runner import ExampleRunner
from pattern_catalogue.verifier import Verifier


@pytest.fixture
def registry() -> PatternRegistry:
    """Empty registry."""
    return PatternRegistry()


@pytest.fixture
def catalogue() -> PatternRegistry:
    """Registry holding every built-in entry."""
    return default_registry()


@pytest.fixture
def verifier(registry) -> Verifier:
    return Verifier(registry)


@pytest.fixture
def runner(registry) -> ExampleRunner:
    return ExampleRunner(registry)

