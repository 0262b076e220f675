"""
Backport of a patch series onto one target branch.

``backport_once`` runs the whole sequence for a single target against the
run's working repository:

1. fetch remote refs
2. check out ``origin/<base>``
3. create ``<head>``
4. apply every patch in order with ``git am -3``
5. push ``<head>`` to the bot remote
6. open a pull request from ``<bot>:<head>`` onto ``<base>``

A failure in steps 1-5 leaves nothing pushed. A failed apply aborts the
in-progress ``git am`` before the error propagates. If step 6 fails the
pushed branch stays on the bot's fork; it is not deleted.
"""

import contextlib
import os
import tempfile
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from backport.exceptions import BackportError
from backport.logging import get_logger

if TYPE_CHECKING:
    from backport.client import AsyncGitHubClient
    from backport.git import WorkingRepository
    from backport.types.pulls import Proposal

logger = get_logger("run")


@dataclass(frozen=True)
class Target:
    """One backport destination."""

    base: str
    head: str


class ApplyState(Enum):
    CREATED = "created"
    APPLYING = "applying"
    APPLIED = "applied"
    ABORTED = "aborted"
    FAILED = "failed"


@contextlib.contextmanager
def scratch_patch_file(patch: bytes, directory: str | Path | None = None) -> Iterator[Path]:
    """Write a patch to a temporary file that is removed on exit, even on error."""
    fd, name = tempfile.mkstemp(suffix=".patch", dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(patch)
        yield path
    finally:
        path.unlink(missing_ok=True)


class PatchSeries:
    """
    Applies an ordered list of patches to the checked-out branch.

    Moves from CREATED through APPLYING (with the index of the patch being
    applied) to APPLIED. A patch that does not apply aborts the ``git am``
    session and ends in ABORTED. A scratch file that cannot be written ends
    in FAILED; no ``git am`` session was started for it, so nothing is aborted.
    """

    def __init__(
        self,
        repository: "WorkingRepository",
        patches: Sequence[bytes],
        scratch_dir: str | Path | None = None,
    ) -> None:
        self.repository = repository
        self.patches = list(patches)
        self.scratch_dir = scratch_dir
        self.state = ApplyState.CREATED
        self.index: int | None = None
        self.am_in_progress = False

    def apply(self) -> None:
        """
        Apply every patch in order.

        Raises:
            PatchApplyError: If a patch does not apply; the series is aborted first
            OSError: If a patch cannot be written to the scratch directory
        """
        if self.state is not ApplyState.CREATED:
            raise RuntimeError(f"Patch series already {self.state.value}")

        with self._abort_on_error():
            for index, patch in enumerate(self.patches):
                self.state = ApplyState.APPLYING
                self.index = index
                with scratch_patch_file(patch, self.scratch_dir) as patch_file:
                    with self._am_session():
                        self.repository.apply_patch(patch_file, index=index)
        self.state = ApplyState.APPLIED

    @contextlib.contextmanager
    def _am_session(self) -> Iterator[None]:
        self.am_in_progress = True
        yield
        self.am_in_progress = False

    @contextlib.contextmanager
    def _abort_on_error(self) -> Iterator[None]:
        try:
            yield
        except BaseException:
            if not self.am_in_progress:
                self.state = ApplyState.FAILED
                raise
            self.state = ApplyState.ABORTED
            self.am_in_progress = False
            try:
                self.repository.abort_apply()
            except BackportError as abort_error:
                logger.warning("Could not abort git am: %s", abort_error)
            raise


async def backport_once(
    *,
    github: "AsyncGitHubClient",
    repository: "WorkingRepository",
    owner: str,
    repo: str,
    target: Target,
    patches: Sequence[bytes],
    title: str,
    body: str,
    bot_username: str,
    push_remote: str,
    scratch_dir: str | Path | None = None,
) -> "Proposal":
    """
    Replay ``patches`` onto ``target.base`` and open a pull request for it.

    Args:
        github: Client authenticated as the bot account
        repository: The run's working clone; must not be used concurrently
        owner: Owner of the source repository
        repo: Source repository name
        target: Base and head branch names
        patches: Patches in original commit order
        title: Pull request title
        body: Pull request body
        bot_username: Owner of the fork ``push_remote`` points at
        push_remote: Remote the head branch is pushed to
        scratch_dir: Where temporary patch files are written

    Returns:
        The opened pull request

    Raises:
        GitCommandError: If fetch, checkout, branch creation or push fails
        PatchApplyError: If a patch does not apply
        HostApiError: If the pull request cannot be opened
    """
    repository.fetch("origin")
    repository.checkout(f"origin/{target.base}")
    repository.create_branch(target.head)

    PatchSeries(repository, patches, scratch_dir).apply()

    repository.push(push_remote, target.head)
    logger.info("Pushed %s to %s", target.head, push_remote)

    proposal = await github.pulls.create(
        owner=owner,
        repo=repo,
        base=target.base,
        head=f"{bot_username}:{target.head}",
        title=title,
        body=body,
        maintainer_can_modify=True,
    )
    logger.info("Opened #%d onto %s: %s", proposal.number, target.base, proposal.html_url)
    return proposal
