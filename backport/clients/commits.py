"""Commits resource client."""

from typing import TYPE_CHECKING

from backport.transport import PATCH_MEDIA_TYPE

if TYPE_CHECKING:
    from backport.transport import AsyncHTTPTransport


class CommitsClient:
    """Async client for commit operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def get_patch(self, url: str) -> bytes:
        """
        Fetch a commit's patch in mbox format, suitable for ``git am``.

        Args:
            url: The commit's API URL, as returned in commit listings

        Returns:
            Raw patch bytes, exactly as served
        """
        return await self.transport.request_bytes(url, accept=PATCH_MEDIA_TYPE)
