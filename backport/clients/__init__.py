"""GitHub resource clients."""

from backport.clients.commits import CommitsClient
from backport.clients.issues import IssuesClient
from backport.clients.pulls import PullsClient
from backport.clients.repos import ReposClient

__all__ = [
    "CommitsClient",
    "IssuesClient",
    "PullsClient",
    "ReposClient",
]
