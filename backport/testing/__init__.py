"""Backport testing utilities.

Provides mock clients and fixtures for testing code that drives the backport engine.
"""

from backport.testing.fixtures import create_mock_commit, create_mock_event
from backport.testing.mock import (
    MockCall,
    MockGitHubClient,
    MockResponse,
    MockWorkingRepository,
)

__all__ = [
    # Mocks
    "MockGitHubClient",
    "MockWorkingRepository",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_commit",
    "create_mock_event",
]
