"""Transient value types describing a working tree at prompt-render time."""

from dataclasses import dataclass
from enum import Enum


class SpecialMode(Enum):
    """Repository states that replace the normal branch summary."""

    NONE = "none"
    MERGING = "merging"
    REBASING = "rebasing"
    DETACHED = "detached"


@dataclass(frozen=True)
class MergeInfo:
    """Captures extracted from a merge message.

    Either field may be empty when the message does not follow git's
    default wording.
    """

    ref: str
    into: str  # " into <branch>" tail, including the leading space


@dataclass(frozen=True)
class RebaseInfo:
    """Branch being rebased and the commit it is being replayed onto."""

    branch: str
    onto: str


@dataclass(frozen=True)
class RepositoryState:
    """Top-level repository checks plus the detected special mode."""

    is_valid: bool
    has_commits: bool
    special_mode: SpecialMode
    merge: MergeInfo | None = None
    rebase: RebaseInfo | None = None


@dataclass(frozen=True)
class BranchInfo:
    """A local branch and its configured upstream."""

    name: str
    upstream: str | None  # None if no tracking branch


@dataclass(frozen=True)
class DirtyStatus:
    """Five independent working-tree signals."""

    any_changes: bool
    tracked: bool
    untracked: bool
    staged: bool
    stashed: bool


@dataclass(frozen=True)
class SyncStatus:
    """Commit counts relative to the upstream branch."""

    behind: int
    ahead: int
