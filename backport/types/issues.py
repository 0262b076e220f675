"""Issue comment data models."""

from dataclasses import dataclass


@dataclass
class Comment:
    """A comment posted on an issue or pull request."""

    id: int
    html_url: str
    body: str
