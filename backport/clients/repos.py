"""Repositories resource client."""

from typing import TYPE_CHECKING

from backport.types.repos import MergeSettings

if TYPE_CHECKING:
    from backport.transport import AsyncHTTPTransport


class ReposClient:
    """Async client for repository operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def get_merge_settings(self, owner: str, repo: str) -> MergeSettings:
        """
        Get the merge methods a repository allows.

        Args:
            owner: Repository owner login
            repo: Repository name

        Returns:
            MergeSettings for the repository
        """
        data = await self.transport.request(
            method="GET",
            path=f"/repos/{owner}/{repo}",
        )
        return MergeSettings(
            allow_merge_commit=data.get("allow_merge_commit", True),
            allow_rebase_merge=data.get("allow_rebase_merge", True),
            allow_squash_merge=data.get("allow_squash_merge", True),
        )
