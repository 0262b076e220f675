"""Issues resource client."""

from typing import TYPE_CHECKING

from backport.types.issues import Comment

if TYPE_CHECKING:
    from backport.transport import AsyncHTTPTransport


class IssuesClient:
    """Async client for issue and pull request comments."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def create_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> Comment:
        """
        Post a comment on an issue or pull request.

        Args:
            owner: Repository owner login
            repo: Repository name
            issue_number: Issue or pull request number
            body: Markdown comment body

        Returns:
            The created Comment
        """
        data = await self.transport.request(
            method="POST",
            path=f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            body={"body": body},
        )
        return Comment(
            id=data["id"],
            html_url=data.get("html_url", ""),
            body=data.get("body", body),
        )
