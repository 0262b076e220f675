"""Manual recovery instructions for a failed backport."""

from collections.abc import Sequence

from backport.transport import PATCH_MEDIA_TYPE
from backport.types.pulls import CommitRef


def recovery_commands(
    base: str,
    head: str,
    commit_to_backport: str | None = None,
    commits: Sequence[CommitRef] = (),
) -> list[str]:
    """
    Shell transcript that reproduces a backport by hand.

    The merge commit is cherry-picked when it is known. Otherwise each commit
    is downloaded as a patch and applied with ``git am -3`` in order.
    """
    worktree_path = f".worktrees/backport-{base}"
    lines = [
        "# Fetch latest updates from GitHub",
        "git fetch",
        "# Create a new working tree",
        f"git worktree add {worktree_path} {base}",
        "# Navigate to the new working tree",
        f"cd {worktree_path}",
        "# Create a new branch",
        f"git switch --create {head}",
    ]
    if commit_to_backport:
        lines += [
            "# Cherry-pick the merged commit of this pull request and resolve the conflicts",
            f"git cherry-pick {commit_to_backport}",
        ]
    else:
        lines.append("# Apply each commit of this pull request in order and resolve the conflicts")
        for commit in commits:
            lines.append(
                f"curl -sL -H 'Accept: {PATCH_MEDIA_TYPE}' -H \"Authorization: Bearer $GITHUB_TOKEN\" "
                f"{commit.url} | git am -3"
            )
    lines += [
        "# Push it to GitHub",
        f"git push --set-upstream origin {head}",
        "# Go back to the original working tree",
        "cd ../..",
        "# Delete the working tree",
        f"git worktree remove {worktree_path}",
    ]
    return lines


def get_failed_backport_comment_body(
    base: str,
    head: str,
    error_message: str,
    commit_to_backport: str | None = None,
    commits: Sequence[CommitRef] = (),
) -> str:
    """Markdown comment posted on the source pull request when a backport fails."""
    return "\n".join(
        [
            f"The backport to `{base}` failed:",
            "```",
            error_message,
            "```",
            "To backport manually, run these commands in your terminal:",
            "```bash",
            *recovery_commands(base, head, commit_to_backport, commits),
            "```",
            f"Then, create a pull request where the `base` branch is `{base}` "
            f"and the `compare`/`head` branch is `{head}`.",
        ]
    )
