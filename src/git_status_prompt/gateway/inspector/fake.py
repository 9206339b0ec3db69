"""Fake implementation of RepoInspector for testing."""

from git_status_prompt.gateway.inspector.abc import RebaseFiles, RepoInspector
from git_status_prompt.types import BranchInfo


class FakeRepoInspector(RepoInspector):
    """In-memory fake with every answer fixed at construction.

    The defaults describe a clean repository on `main` with no upstream.
    Probes served are appended to `probe_calls` so tests can check which
    queries the formatter made.
    """

    def __init__(
        self,
        *,
        is_valid: bool = True,
        has_commits: bool = True,
        current_branch: str | None = "main",
        branches: list[BranchInfo] | None = None,
        any_changes: bool = False,
        tracked_dirty: bool = False,
        untracked: bool = False,
        staged_dirty: bool = False,
        stash: bool = False,
        divergences: dict[tuple[str, str], list[str]] | None = None,
        merge_message: str | None = None,
        rebase_files: RebaseFiles | None = None,
    ) -> None:
        """Create FakeRepoInspector with pre-configured state.

        Args:
            branches: Local branches; defaults to the current branch without
                an upstream
            divergences: Mapping of (local, remote) -> left-right listing.
                Pairs missing from the mapping behave like a failed listing.
        """
        self._is_valid = is_valid
        self._has_commits = has_commits
        self._current_branch = current_branch
        if branches is not None:
            self._branches = branches
        elif current_branch is not None:
            self._branches = [BranchInfo(name=current_branch, upstream=None)]
        else:
            self._branches = []
        self._any_changes = any_changes
        self._tracked_dirty = tracked_dirty
        self._untracked = untracked
        self._staged_dirty = staged_dirty
        self._stash = stash
        self._divergences = divergences if divergences is not None else {}
        self._merge_message = merge_message
        self._rebase_files = rebase_files
        self.probe_calls: list[str] = []

    def is_valid(self) -> bool:
        self.probe_calls.append("is_valid")
        return self._is_valid

    def has_commits(self) -> bool:
        self.probe_calls.append("has_commits")
        return self._has_commits

    def current_branch(self) -> str | None:
        self.probe_calls.append("current_branch")
        return self._current_branch

    def branch_upstream_pairs(self) -> list[BranchInfo]:
        self.probe_calls.append("branch_upstream_pairs")
        return list(self._branches)

    def has_any_changes(self) -> bool:
        self.probe_calls.append("has_any_changes")
        return self._any_changes

    def is_tracked_dirty(self) -> bool:
        self.probe_calls.append("is_tracked_dirty")
        return self._tracked_dirty

    def has_untracked(self) -> bool:
        self.probe_calls.append("has_untracked")
        return self._untracked

    def is_staged_dirty(self) -> bool:
        self.probe_calls.append("is_staged_dirty")
        return self._staged_dirty

    def has_stash(self) -> bool:
        self.probe_calls.append("has_stash")
        return self._stash

    def divergence(self, local: str, remote: str) -> list[str] | None:
        self.probe_calls.append("divergence")
        listing = self._divergences.get((local, remote))
        if listing is None:
            return None
        return list(listing)

    def merge_message(self) -> str | None:
        self.probe_calls.append("merge_message")
        return self._merge_message

    def rebase_files(self) -> RebaseFiles | None:
        self.probe_calls.append("rebase_files")
        return self._rebase_files
