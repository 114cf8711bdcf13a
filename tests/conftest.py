"""Pytest configuration and fixtures."""

import pytest

from mx3 import seed_everything

from reference_data import ALPHABET, FOX


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment with fixed seed."""
    seed_everything(42)
    yield


@pytest.fixture
def alphabet():
    return ALPHABET


@pytest.fixture
def fox():
    return FOX
