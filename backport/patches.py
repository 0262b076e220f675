"""
Commit extraction and patch download.

The commits of a merged pull request are listed once per run and their
patches downloaded concurrently. The patch list always comes back in the
original commit order, whatever order the downloads complete in, because
``git am`` has to replay them in that order.
"""

import asyncio
import re
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, TypeVar

from backport.config import DEFAULT_MAX_CONCURRENCY
from backport.logging import get_logger
from backport.types.pulls import CommitRef

if TYPE_CHECKING:
    from backport.client import AsyncGitHubClient

T = TypeVar("T")
R = TypeVar("R")

logger = get_logger("run")

# Merges of one branch into another made while the pull request was under
# development. They carry no authored content of their own.
MERGE_COMMIT_PATTERN = re.compile(r"Merge branch '[^']+' into \S+")


def is_merge_commit(message: str) -> bool:
    """True if the whole message is a synthetic "Merge branch 'x' into y"."""
    return MERGE_COMMIT_PATTERN.fullmatch(message.strip()) is not None


async def extract_commits(
    github: "AsyncGitHubClient",
    owner: str,
    repo: str,
    pull_request_number: int,
) -> list[CommitRef]:
    """
    List the commits to replay for a pull request, without branch merges.

    Raises:
        HostApiError: If the commits cannot be listed
    """
    commits = await github.pulls.list_commits(owner, repo, pull_request_number)
    kept = [commit for commit in commits if not is_merge_commit(commit.message)]
    skipped = len(commits) - len(kept)
    if skipped:
        logger.info("Skipping %d merge commit(s) of #%d", skipped, pull_request_number)
    return kept


async def bounded_map(
    fn: Callable[[T], Awaitable[R]],
    items: Sequence[T],
    concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> list[R]:
    """
    Await ``fn`` for every item with at most ``concurrency`` in flight.

    Results are returned in input order. If any call fails, the calls still
    pending are cancelled and the first error is raised; no partial result
    is returned.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    semaphore = asyncio.Semaphore(concurrency)

    async def run(item: T) -> R:
        async with semaphore:
            return await fn(item)

    tasks = [asyncio.ensure_future(run(item)) for item in items]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def fetch_patches(
    github: "AsyncGitHubClient",
    commits: Sequence[CommitRef],
    concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> list[bytes]:
    """
    Download the patch of every commit, in commit order.

    Raises:
        HostApiError: If any single download fails
    """
    async def fetch(commit: CommitRef) -> bytes:
        return await github.commits.get_patch(commit.url)

    patches = await bounded_map(fetch, commits, concurrency)
    logger.info("Fetched %d patch(es)", len(patches))
    return patches
