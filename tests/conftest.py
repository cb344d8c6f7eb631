"""Pytest configuration and fixtures for neo-logout tests."""

from types import SimpleNamespace
from typing import List, Tuple

import pytest

from .helpers import build_request


@pytest.fixture
def make_request():
    """Factory for bare Starlette requests."""
    return build_request


@pytest.fixture
def calls() -> List[Tuple]:
    """Shared invocation log for recording handlers."""
    return []


@pytest.fixture
def principal():
    """Sample authenticated principal."""
    return SimpleNamespace(user_id="user-123", username="user")
