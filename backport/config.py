"""Run configuration, read from GitHub Actions style environment variables."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from backport.exceptions import ConfigurationError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_SERVER_URL = "https://github.com"
DEFAULT_MAX_CONCURRENCY = 4

BOT_REMOTE = "botrepo"
COMMITTER_NAME = "github-actions[bot]"
COMMITTER_EMAIL = "github-actions[bot]@users.noreply.github.com"


@dataclass
class BackportConfig:
    """Everything a run needs besides the trigger event."""

    github_token: str
    bot_username: str
    bot_token: str = ""
    api_url: str = DEFAULT_API_URL
    server_url: str = DEFAULT_SERVER_URL
    workspace: Path = field(default_factory=Path.cwd)
    event_path: Path | None = None
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    push_remote: str = BOT_REMOTE
    committer_name: str = COMMITTER_NAME
    committer_email: str = COMMITTER_EMAIL

    def __post_init__(self) -> None:
        if not self.bot_token:
            self.bot_token = self.github_token
        if self.max_concurrency < 1:
            raise ConfigurationError(
                f"max_concurrency must be at least 1, got {self.max_concurrency}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BackportConfig":
        """
        Build configuration from the environment.

        Environment variables:
            INPUT_GITHUB_TOKEN: Token used to clone and read the source repository (required)
            INPUT_BOT_USERNAME: Account that owns the fork the backport branches are pushed to (required)
            INPUT_BOT_TOKEN: Token of the bot account (optional, default: INPUT_GITHUB_TOKEN)
            INPUT_MAX_CONCURRENCY: Parallel patch downloads (optional, default: 4)
            GITHUB_API_URL, GITHUB_SERVER_URL, GITHUB_WORKSPACE, GITHUB_EVENT_PATH

        Raises:
            ConfigurationError: If a required variable is missing or malformed
        """
        env = os.environ if environ is None else environ

        github_token = env.get("INPUT_GITHUB_TOKEN") or env.get("GITHUB_TOKEN")
        if not github_token:
            raise ConfigurationError("INPUT_GITHUB_TOKEN environment variable not set")

        bot_username = env.get("INPUT_BOT_USERNAME")
        if not bot_username:
            raise ConfigurationError("INPUT_BOT_USERNAME environment variable not set")

        raw_concurrency = env.get("INPUT_MAX_CONCURRENCY") or str(DEFAULT_MAX_CONCURRENCY)
        try:
            max_concurrency = int(raw_concurrency)
        except ValueError:
            raise ConfigurationError(
                f"Invalid INPUT_MAX_CONCURRENCY: {raw_concurrency}. Must be an integer"
            ) from None

        event_path = env.get("GITHUB_EVENT_PATH")

        return cls(
            github_token=github_token,
            bot_username=bot_username,
            bot_token=env.get("INPUT_BOT_TOKEN", ""),
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            server_url=env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
            workspace=Path(env.get("GITHUB_WORKSPACE") or Path.cwd()),
            event_path=Path(event_path) if event_path else None,
            max_concurrency=max_concurrency,
        )

    def clone_url(self, owner: str, repo: str) -> str:
        """Authenticated URL of the source repository."""
        return self._authenticated_url(self.github_token, owner, repo)

    def push_url(self, repo: str) -> str:
        """Authenticated URL of the bot's fork, where backport branches are pushed."""
        return self._authenticated_url(self.bot_token, self.bot_username, repo)

    def _authenticated_url(self, token: str, owner: str, repo: str) -> str:
        scheme, _, host = self.server_url.rstrip("/").partition("://")
        return f"{scheme}://x-access-token:{token}@{host}/{owner}/{repo}.git"
