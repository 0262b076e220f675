"""
Async GitHub client.

Provides the interface the backport engine uses to talk to the GitHub REST API.
"""

from typing import Any

import httpx

from backport.clients import CommitsClient, IssuesClient, PullsClient, ReposClient
from backport.exceptions import ConfigurationError
from backport.transport import AsyncHTTPTransport, RetryConfig


class AsyncGitHubClient:
    """
    Async client for interacting with the GitHub API.

    Aggregates the resource clients and handles authentication.

    Example:
        ```python
        import asyncio
        from backport.client import AsyncGitHubClient

        async def main():
            async with AsyncGitHubClient(token="ghp_...") as github:
                commits = await github.pulls.list_commits("octo", "app", 42)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Access token
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            http_transport: Optional httpx transport, for stubbing the network
        """
        if not token:
            raise ConfigurationError("A GitHub token is required")

        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            http_transport=http_transport,
        )

        self.pulls = PullsClient(self._transport)
        self.commits = CommitsClient(self._transport)
        self.issues = IssuesClient(self._transport)
        self.repos = ReposClient(self._transport)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
