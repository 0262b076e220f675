"""
Pytest plugin for backport testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["backport.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from backport.testing.fixtures import (
    mock_github,
    mock_repository,
    sample_commits,
    sample_config,
    sample_event,
)

__all__ = [
    "mock_github",
    "mock_repository",
    "sample_config",
    "sample_commits",
    "sample_event",
]
