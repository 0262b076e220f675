"""Shared fixtures."""

from backport.testing.fixtures import (  # noqa: F401
    mock_github,
    mock_repository,
    sample_commits,
    sample_config,
    sample_event,
)
