"""Entry point: ``python -m backport`` inside a GitHub Actions job."""

import asyncio
import sys

from backport.client import AsyncGitHubClient
from backport.config import BackportConfig
from backport.event import PullRequestEvent
from backport.exceptions import BackportError, ConfigurationError
from backport.logging import configure_logging, get_logger
from backport.orchestrator import RunResult, backport

logger = get_logger("run")


async def run(config: BackportConfig) -> RunResult:
    if config.event_path is None:
        raise ConfigurationError("GITHUB_EVENT_PATH environment variable not set")
    event = PullRequestEvent.from_file(config.event_path)

    async with AsyncGitHubClient(config.github_token, base_url=config.api_url) as github:
        async with AsyncGitHubClient(config.bot_token, base_url=config.api_url) as bot_github:
            return await backport(event, config, github, bot_github)


def main() -> int:
    configure_logging()
    try:
        config = BackportConfig.from_env()
        result = asyncio.run(run(config))
    except BackportError as e:
        logger.error(e.message)
        return 1

    if result.failed:
        failed = ", ".join(failure.target.base for failure in result.failures)
        logger.error("Backport failed for: %s", failed)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
