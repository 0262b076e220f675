"""Pull request-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitRef:
    """One constituent commit of a pull request."""

    sha: str
    url: str  # API URL; requesting it as a patch yields the commit's mbox
    message: str


@dataclass(frozen=True)
class Proposal:
    """A pull request opened for a backport."""

    number: int
    html_url: str
    base: str
    head: str
