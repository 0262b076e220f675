"""Backport type definitions.

This module exports the data model types returned by the GitHub clients.
"""

from backport.types.issues import Comment
from backport.types.pulls import CommitRef, Proposal
from backport.types.repos import MergeSettings

__all__ = [
    # Pull request types
    "CommitRef",
    "Proposal",
    # Repository types
    "MergeSettings",
    # Issue types
    "Comment",
]
