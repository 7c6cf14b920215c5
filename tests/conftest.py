"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For plain input factories, see tests/fixtures/scoring_fixtures.py
"""

from unittest.mock import Mock

import pytest


@pytest.fixture
def mock_redis():
    """Create a mock Redis client."""
    mock = Mock()
    mock.ping.return_value = True
    mock.get.return_value = None
    mock.setex.return_value = True
    mock.delete.return_value = 1
    mock.info.return_value = {"used_memory_human": "10M"}
    mock.scan.return_value = (0, [])
    return mock
