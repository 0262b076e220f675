"""Repository-related data models."""

from dataclasses import dataclass


@dataclass
class MergeSettings:
    """Merge methods a repository allows."""

    allow_merge_commit: bool
    allow_rebase_merge: bool
    allow_squash_merge: bool

    @property
    def squash_only(self) -> bool:
        return not (self.allow_merge_commit or self.allow_rebase_merge)
