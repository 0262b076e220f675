"""
Backport run orchestration.

A run turns one pull request event into zero or more backports:

- nothing happens unless the pull request is merged and carries at least
  one ``backport`` label that applies to the event;
- the clone, remotes, identity and the patch series are prepared once;
- every target is then attempted in turn against the shared clone. A target
  that fails gets a comment with manual instructions on the source pull
  request and marks the run failed, but the remaining targets still run.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from backport.exceptions import BackportError, HostApiError
from backport.executor import Target, backport_once
from backport.git import WorkingRepository
from backport.labels import backport_targets
from backport.logging import get_logger
from backport.patches import extract_commits, fetch_patches
from backport.report import get_failed_backport_comment_body

if TYPE_CHECKING:
    from backport.client import AsyncGitHubClient
    from backport.config import BackportConfig
    from backport.event import PullRequestEvent
    from backport.types.pulls import CommitRef, Proposal

logger = get_logger("run")

MERGE_METHODS_WARNING = "\n".join(
    [
        "Your repository allows merge commits and rebase merging.",
        " However, Backport only supports rebased and merged pull requests with a single commit"
        " and squashed and merged pull requests.",
        " Consider only allowing squash merging.",
        " See https://help.github.com/en/github/administering-a-repository/about-merge-methods-on-github"
        " for more information.",
    ]
)


@dataclass(frozen=True)
class BackportSuccess:
    target: Target
    proposal: "Proposal"

    ok = True


@dataclass(frozen=True)
class BackportFailure:
    target: Target
    error: Exception

    ok = False

    @property
    def message(self) -> str:
        if isinstance(self.error, BackportError):
            return self.error.message
        return str(self.error)


BackportResult = BackportSuccess | BackportFailure


@dataclass
class RunResult:
    """Outcome of a run, one entry per attempted target."""

    results: list[BackportResult] = field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def failed(self) -> bool:
        return any(not result.ok for result in self.results)

    @property
    def failures(self) -> list[BackportFailure]:
        return [result for result in self.results if isinstance(result, BackportFailure)]


def pull_request_title(base: str, original_title: str) -> str:
    return f"[Backport {base}] {original_title}"


def pull_request_body(commit_to_backport: str | None, pull_request_number: int) -> str:
    if not commit_to_backport:
        return f"Backport from #{pull_request_number}"
    return f"Backport {commit_to_backport} from #{pull_request_number}"


async def warn_if_squash_is_not_the_only_allowed_merge_method(
    github: "AsyncGitHubClient", owner: str, repo: str
) -> None:
    settings = await github.repos.get_merge_settings(owner, repo)
    if not settings.squash_only:
        logger.warning(MERGE_METHODS_WARNING)


def prepare_repository(
    config: "BackportConfig",
    event: "PullRequestEvent",
    clone: Callable[[str, Path], WorkingRepository] = WorkingRepository.clone,
) -> WorkingRepository:
    """Clone the source repository and configure the bot remote and committer."""
    repository = clone(config.clone_url(event.owner, event.repo), config.workspace / event.repo)
    repository.add_remote(config.push_remote, config.push_url(event.repo))
    repository.configure_identity(config.committer_name, config.committer_email)
    return repository


async def backport(
    event: "PullRequestEvent",
    config: "BackportConfig",
    github: "AsyncGitHubClient",
    bot_github: "AsyncGitHubClient",
    clone: Callable[[str, Path], WorkingRepository] = WorkingRepository.clone,
) -> RunResult:
    """
    Backport a merged pull request to every base its labels request.

    Args:
        event: The triggering pull request event
        config: Run configuration
        github: Client for reads, authenticated with the workflow token
        bot_github: Client authenticated as the bot; opens pull requests and posts comments
        clone: Clones the source repository (replaced in tests)

    Returns:
        RunResult with one entry per target; ``failed`` is True if any target failed

    Raises:
        BackportError: If shared setup fails (clone, configuration, commit listing)
    """
    if not event.merged:
        logger.info("#%d is not merged, nothing to backport", event.number)
        return RunResult(skipped_reason="not merged")

    base_to_head = backport_targets(event)
    if not base_to_head:
        logger.info("No backport label on #%d applies to this event", event.number)
        return RunResult(skipped_reason="no backport label")

    await warn_if_squash_is_not_the_only_allowed_merge_method(github, event.owner, event.repo)

    commit_to_backport = event.merge_commit_sha
    logger.info("Backporting %s from #%d", commit_to_backport, event.number)

    repository = prepare_repository(config, event, clone)

    commits = await extract_commits(github, event.owner, event.repo, event.number)
    patches = await fetch_patches(github, commits, config.max_concurrency)

    run = RunResult()
    for base, head in base_to_head.items():
        target = Target(base=base, head=head)
        logger.info("Backporting to %s on %s", base, head)
        try:
            proposal = await backport_once(
                github=bot_github,
                repository=repository,
                owner=event.owner,
                repo=event.repo,
                target=target,
                patches=patches,
                title=pull_request_title(base, event.title),
                body=pull_request_body(commit_to_backport, event.number),
                bot_username=config.bot_username,
                push_remote=config.push_remote,
            )
        except (BackportError, OSError) as error:
            failure = BackportFailure(target=target, error=error)
            run.results.append(failure)
            logger.error("Backport failed: %s", failure.message)
            await _post_failure_comment(bot_github, event, failure, commits)
        else:
            run.results.append(BackportSuccess(target=target, proposal=proposal))

    return run


async def _post_failure_comment(
    bot_github: "AsyncGitHubClient",
    event: "PullRequestEvent",
    failure: BackportFailure,
    commits: list["CommitRef"],
) -> None:
    body = get_failed_backport_comment_body(
        base=failure.target.base,
        head=failure.target.head,
        error_message=failure.message,
        commit_to_backport=event.merge_commit_sha,
        commits=commits,
    )
    try:
        await bot_github.issues.create_comment(event.owner, event.repo, event.number, body)
    except HostApiError as error:
        logger.error("Could not comment on #%d: %s", event.number, error.message)
