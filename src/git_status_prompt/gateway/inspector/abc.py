"""Abstract interface for querying a git working tree.

Every query the prompt needs is a single typed method here, so the formatter
can run against the fake implementation in tests without spawning git.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from git_status_prompt.types import BranchInfo


@dataclass(frozen=True)
class RebaseFiles:
    """Raw contents of the rebase state files."""

    head_name: str
    onto: str


class RepoInspector(ABC):
    """Read-only queries against the repository containing the working directory.

    Implementations never raise for git failures: each query reports its
    "no signal" value (False, None, or an empty list) instead.
    """

    @abstractmethod
    def is_valid(self) -> bool:
        """Check if the working directory is inside a git work tree."""
        ...

    @abstractmethod
    def has_commits(self) -> bool:
        """Check if HEAD resolves to a commit."""
        ...

    @abstractmethod
    def current_branch(self) -> str | None:
        """Get the abbreviated name of HEAD.

        Returns:
            Branch short name, the literal "HEAD" when detached, or None if
            the name could not be resolved
        """
        ...

    @abstractmethod
    def branch_upstream_pairs(self) -> list[BranchInfo]:
        """List every local branch with its configured upstream."""
        ...

    @abstractmethod
    def has_any_changes(self) -> bool:
        """Fast probe for untracked or modified files in the work tree."""
        ...

    @abstractmethod
    def is_tracked_dirty(self) -> bool:
        """Check if tracked files differ from the index."""
        ...

    @abstractmethod
    def has_untracked(self) -> bool:
        """Check for untracked files not covered by ignore rules."""
        ...

    @abstractmethod
    def is_staged_dirty(self) -> bool:
        """Check if the index differs from HEAD."""
        ...

    @abstractmethod
    def has_stash(self) -> bool:
        """Check if at least one stash entry exists."""
        ...

    @abstractmethod
    def divergence(self, local: str, remote: str) -> list[str] | None:
        """List commits in the symmetric difference of two refs.

        Args:
            local: Local branch name (left side)
            remote: Upstream ref name (right side)

        Returns:
            One entry per commit, prefixed with "<" (local only) or ">"
            (remote only), or None if the listing failed
        """
        ...

    @abstractmethod
    def merge_message(self) -> str | None:
        """Read the pending merge message.

        Returns:
            Message contents while a merge is in progress, None otherwise
        """
        ...

    @abstractmethod
    def rebase_files(self) -> RebaseFiles | None:
        """Read the rebase state files.

        Returns:
            RebaseFiles while a rebase is in progress, None otherwise
        """
        ...
