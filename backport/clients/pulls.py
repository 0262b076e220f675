"""Pull requests resource client."""

from typing import TYPE_CHECKING, Any

from backport.types.pulls import CommitRef, Proposal

if TYPE_CHECKING:
    from backport.transport import AsyncHTTPTransport

# GitHub caps the page size for pull request commits at 100.
COMMITS_PAGE_SIZE = 100


class PullsClient:
    """Async client for pull request operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def list_commits(
        self, owner: str, repo: str, pull_number: int
    ) -> list[CommitRef]:
        """
        List the commits of a pull request in their original order.

        Follows pagination until a short page is returned.

        Args:
            owner: Repository owner login
            repo: Repository name
            pull_number: Pull request number

        Returns:
            Ordered list of CommitRef objects
        """
        commits: list[CommitRef] = []
        page = 1
        while True:
            data = await self.transport.request(
                method="GET",
                path=f"/repos/{owner}/{repo}/pulls/{pull_number}/commits",
                params={"per_page": COMMITS_PAGE_SIZE, "page": page},
            )
            commits.extend(self._parse_commit(item) for item in data)
            if len(data) < COMMITS_PAGE_SIZE:
                return commits
            page += 1

    async def create(
        self,
        owner: str,
        repo: str,
        base: str,
        head: str,
        title: str,
        body: str,
        maintainer_can_modify: bool = True,
    ) -> Proposal:
        """
        Open a pull request.

        Args:
            owner: Repository owner login
            repo: Repository name
            base: Branch to merge into
            head: Branch containing changes, as "user:branch" for forks
            title: Pull request title
            body: Pull request body
            maintainer_can_modify: Allow maintainers to push to the head branch

        Returns:
            The created Proposal
        """
        data = await self.transport.request(
            method="POST",
            path=f"/repos/{owner}/{repo}/pulls",
            body={
                "base": base,
                "body": body,
                "head": head,
                "maintainer_can_modify": maintainer_can_modify,
                "title": title,
            },
        )
        return Proposal(
            number=data["number"],
            html_url=data.get("html_url", ""),
            base=base,
            head=head,
        )

    def _parse_commit(self, data: dict[str, Any]) -> CommitRef:
        """Parse a commit object from the pull request commits listing."""
        return CommitRef(
            sha=data["sha"],
            url=data["url"],
            message=data.get("commit", {}).get("message", ""),
        )
