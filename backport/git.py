"""
Local git working repository.

Wraps the single clone a backport run owns. Every mutation (checkout, branch,
apply, push) goes through one ``WorkingRepository`` instance, and callers run
them one at a time; the clone is never shared between concurrent tasks.
"""

import subprocess
from pathlib import Path

from backport.exceptions import GitCommandError, PatchApplyError
from backport.logging import get_logger, log_git_command, mask_sensitive_data

logger = get_logger("git")


class WorkingRepository:
    """
    A local clone and the git commands the backport engine runs against it.

    Example:
        ```python
        from backport.git import WorkingRepository

        repository = WorkingRepository.clone(clone_url, "./app")
        repository.configure_identity("bot", "bot@example.com")
        repository.fetch("origin")
        repository.checkout("origin/release-1")
        repository.create_branch("backport-42-to-release-1")
        ```
    """

    def __init__(self, path: str | Path) -> None:
        """
        Wrap an existing clone.

        Args:
            path: Path to the clone's working tree
        """
        self.path = Path(path)

    @classmethod
    def clone(cls, url: str, destination: str | Path) -> "WorkingRepository":
        """
        Clone a repository and wrap the new working tree.

        Raises:
            GitCommandError: If git clone fails
        """
        destination = Path(destination)
        _run(["git", "clone", url, str(destination)])
        return cls(destination)

    def add_remote(self, name: str, url: str) -> None:
        """Register a remote, e.g. the bot's fork that backport branches are pushed to."""
        self._git("remote", "add", name, url)

    def configure_identity(self, name: str, email: str) -> None:
        """Set the committer identity for this clone only."""
        self._git("config", "user.name", name)
        self._git("config", "user.email", email)

    def fetch(self, remote: str = "origin") -> None:
        self._git("fetch", remote)

    def checkout(self, ref: str) -> None:
        self._git("checkout", ref)

    def create_branch(self, name: str) -> None:
        """Create a branch at HEAD and check it out."""
        self._git("checkout", "-b", name)

    def apply_patch(self, patch_file: str | Path, index: int | None = None) -> None:
        """
        Apply one mbox patch with three-way fallback (``git am -3``).

        Args:
            patch_file: Path to the patch on disk
            index: Position of the patch in its series, reported on failure

        Raises:
            PatchApplyError: If the patch does not apply
        """
        try:
            self._git("am", "-3", str(patch_file))
        except GitCommandError as e:
            raise PatchApplyError(e.command, e.returncode, e.stderr, patch_index=index) from e

    def abort_apply(self) -> None:
        """Abort an in-progress ``git am`` and restore the original branch state."""
        self._git("am", "--abort")

    def push(self, remote: str, branch: str) -> None:
        self._git("push", remote, branch)

    def _git(self, *args: str) -> str:
        return _run(["git", *args], cwd=self.path)


def _run(command: list[str], cwd: Path | None = None) -> str:
    """
    Run a git command, returning its stdout.

    Raises:
        GitCommandError: If the command exits with a non-zero status or
            git cannot be started
    """
    log_git_command(command, str(cwd) if cwd else None)
    masked = [mask_sensitive_data(arg) for arg in command]
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        stderr = mask_sensitive_data(e.stderr or e.stdout or "")
        logger.debug("git exited with %s: %s", e.returncode, stderr.strip())
        raise GitCommandError(masked, e.returncode, stderr) from None
    except OSError as e:
        raise GitCommandError(masked, -1, str(e)) from e
    return result.stdout
