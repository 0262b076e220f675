"""
Pull request trigger events.

Turns a ``pull_request`` webhook payload into the fields the backport engine
reads. Only the ``closed`` and ``labeled`` actions can request a backport; any
other action maps to ``ActionKind.OTHER``.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from backport.exceptions import ConfigurationError


class ActionKind(Enum):
    """The pull request actions the engine distinguishes."""

    CLOSED = "closed"
    LABELED = "labeled"
    OTHER = "other"

    @classmethod
    def parse(cls, action: str | None) -> "ActionKind":
        if action == "closed":
            return cls.CLOSED
        if action == "labeled":
            return cls.LABELED
        return cls.OTHER


@dataclass
class PullRequestEvent:
    """A merged-or-not pull request event."""

    action: ActionKind
    number: int
    title: str
    merged: bool
    owner: str
    repo: str
    author: str = ""
    merge_commit_sha: str | None = None
    label: str | None = None  # only set for LABELED
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PullRequestEvent":
        """
        Parse a webhook payload.

        Raises:
            ConfigurationError: If the payload is not a pull request event
        """
        try:
            pull_request = payload["pull_request"]
            repository = payload["repository"]
            number = int(pull_request["number"])
            owner = repository["owner"]["login"]
            repo = repository["name"]
            labels = [item["name"] for item in pull_request.get("labels") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Not a pull_request event payload: missing {e}") from e

        label = payload.get("label") or {}

        return cls(
            action=ActionKind.parse(payload.get("action")),
            number=number,
            title=pull_request.get("title", ""),
            merged=bool(pull_request.get("merged")),
            owner=owner,
            repo=repo,
            author=(pull_request.get("user") or {}).get("login", ""),
            merge_commit_sha=pull_request.get("merge_commit_sha"),
            label=label.get("name"),
            labels=labels,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "PullRequestEvent":
        """Load and parse the payload file GitHub Actions writes to GITHUB_EVENT_PATH."""
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read event payload {path}: {e}") from e
        return cls.from_payload(payload)
