"""Backport - replay merged pull requests onto other branches."""

from backport.client import AsyncGitHubClient
from backport.config import BackportConfig
from backport.event import ActionKind, PullRequestEvent
from backport.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackportError,
    ConfigurationError,
    ConflictError,
    GitCommandError,
    HostApiError,
    NotFoundError,
    PatchApplyError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from backport.executor import Target, backport_once
from backport.git import WorkingRepository
from backport.labels import get_backport_base_to_head
from backport.logging import configure_logging, get_logger
from backport.orchestrator import (
    BackportFailure,
    BackportSuccess,
    RunResult,
    backport,
)
from backport.patches import extract_commits, fetch_patches
from backport.report import get_failed_backport_comment_body
from backport.transport import AsyncHTTPTransport, RetryConfig

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Orchestration
    "backport",
    "backport_once",
    "RunResult",
    "BackportSuccess",
    "BackportFailure",
    "Target",
    # Building blocks
    "get_backport_base_to_head",
    "extract_commits",
    "fetch_patches",
    "get_failed_backport_comment_body",
    "WorkingRepository",
    # Event and configuration
    "ActionKind",
    "PullRequestEvent",
    "BackportConfig",
    # Client
    "AsyncGitHubClient",
    "AsyncHTTPTransport",
    "RetryConfig",
    # Exceptions
    "BackportError",
    "ConfigurationError",
    "HostApiError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "GitCommandError",
    "PatchApplyError",
    # Logging
    "configure_logging",
    "get_logger",
]
