"""Compose the prompt string from repository inspector queries.

Rendering is a straight sequence of checks. The first three (valid repository,
has commits, branch resolves) abort the whole render; after that each probe
degrades to "no signal" on its own.
"""

import logging

from git_status_prompt.ansi import Token, TokenSeq
from git_status_prompt.gateway.inspector.abc import RepoInspector
from git_status_prompt.parsing import (
    count_divergence,
    find_branch,
    parse_merge_message,
    parse_rebase_state,
)
from git_status_prompt.theme import StyleKind, Theme
from git_status_prompt.types import (
    BranchInfo,
    DirtyStatus,
    RepositoryState,
    SpecialMode,
    SyncStatus,
)

logger = logging.getLogger(__name__)

NO_COMMITS_LABEL = "(no commits)"
DETACHED_HEAD_NAME = "HEAD"


def detect_repository_state(inspector: RepoInspector, branch_name: str) -> RepositoryState:
    """Detect merge, rebase, or detached HEAD, in that priority order.

    Only called once the repository is known to be valid and to have commits.
    """
    merge_text = inspector.merge_message()
    if merge_text is not None:
        merge = parse_merge_message(merge_text)
        if merge is not None:
            return RepositoryState(
                is_valid=True, has_commits=True, special_mode=SpecialMode.MERGING, merge=merge
            )

    rebase_files = inspector.rebase_files()
    if rebase_files is not None:
        rebase = parse_rebase_state(rebase_files.head_name, rebase_files.onto)
        return RepositoryState(
            is_valid=True, has_commits=True, special_mode=SpecialMode.REBASING, rebase=rebase
        )

    if branch_name == DETACHED_HEAD_NAME:
        return RepositoryState(is_valid=True, has_commits=True, special_mode=SpecialMode.DETACHED)

    return RepositoryState(is_valid=True, has_commits=True, special_mode=SpecialMode.NONE)


def build_special_mode_label(state: RepositoryState, theme: Theme) -> Token:
    """Build the single-token label shown instead of the branch summary."""
    color = theme.color(StyleKind.ANOMALY)

    if state.special_mode is SpecialMode.MERGING and state.merge is not None:
        detail = f"{state.merge.ref}{state.merge.into}"
        text = f"(merging {detail})" if detail else "(merging)"
        return Token(text, color=color)

    if state.special_mode is SpecialMode.REBASING and state.rebase is not None:
        return Token(f"(rebasing {state.rebase.branch} onto {state.rebase.onto})", color=color)

    if state.special_mode is SpecialMode.DETACHED:
        return Token("(detached)", color=color)

    return Token("")


def collect_dirty_status(inspector: RepoInspector) -> DirtyStatus:
    # Each probe is independent; "any changes" and "tracked" may disagree
    return DirtyStatus(
        any_changes=inspector.has_any_changes(),
        tracked=inspector.is_tracked_dirty(),
        untracked=inspector.has_untracked(),
        staged=inspector.is_staged_dirty(),
        stashed=inspector.has_stash(),
    )


def collect_sync_status(inspector: RepoInspector, branch: BranchInfo) -> SyncStatus | None:
    """Count commits ahead of and behind the upstream.

    Returns:
        None when the branch has no upstream or the listing failed
    """
    if branch.upstream is None:
        return None

    listing = inspector.divergence(branch.name, branch.upstream)
    if listing is None:
        logger.debug("No divergence data for %s...%s", branch.name, branch.upstream)
        return None

    return count_divergence(listing)


def build_markers(dirty: DirtyStatus, theme: Theme) -> TokenSeq:
    """Status markers in fixed order: stash, untracked, tracked, staged."""
    flags = (
        (dirty.stashed, StyleKind.STASHED),
        (dirty.untracked, StyleKind.UNTRACKED),
        (dirty.tracked, StyleKind.TRACKED),
        (dirty.staged, StyleKind.STAGED),
    )
    return TokenSeq(
        tuple(
            Token(theme.marker(kind) if is_set else "", color=theme.color(kind))
            for is_set, kind in flags
        )
    )


def build_upstream_segment(
    sync: SyncStatus | None, theme: Theme, bracket_kind: StyleKind
) -> TokenSeq:
    """Build `[<behind><<>><ahead>]`, or nothing when there is no sync data."""
    if sync is None:
        return TokenSeq(())

    behind_kind = StyleKind.BEHIND if sync.behind > 0 else StyleKind.EVEN
    ahead_kind = StyleKind.AHEAD if sync.ahead > 0 else StyleKind.EVEN
    bracket_color = theme.color(bracket_kind)

    return TokenSeq(
        (
            Token("[", color=bracket_color),
            Token(f"{sync.behind}{theme.marker(StyleKind.BEHIND)}", color=theme.color(behind_kind)),
            Token(f"{theme.marker(StyleKind.AHEAD)}{sync.ahead}", color=theme.color(ahead_kind)),
            Token("]", color=bracket_color),
        )
    )


def build_branch_expression(
    branch: BranchInfo, dirty: DirtyStatus, sync: SyncStatus | None, theme: Theme
) -> TokenSeq:
    """Build `(<branch><markers><upstream>) ` for normal mode."""
    branch_kind = StyleKind.DIRTY if dirty.any_changes else StyleKind.CLEAN
    branch_color = theme.color(branch_kind)

    return TokenSeq(
        (
            Token("(", color=branch_color),
            Token(branch.name, color=branch_color),
            build_markers(dirty, theme),
            build_upstream_segment(sync, theme, branch_kind),
            Token(")", color=branch_color),
            Token(" "),
        )
    )


def render_status(inspector: RepoInspector, theme: Theme) -> str:
    """Render the status summary for the inspected repository.

    Returns:
        Colored summary, `(no commits)` for an empty repository, or an empty
        string when not in a repository or HEAD cannot be resolved
    """
    if not inspector.is_valid():
        logger.debug("Not inside a git work tree")
        return ""

    if not inspector.has_commits():
        return Token(NO_COMMITS_LABEL, color=theme.color(StyleKind.ANOMALY)).render()

    branch_name = inspector.current_branch()
    if branch_name is None:
        logger.debug("Could not resolve current branch")
        return ""

    state = detect_repository_state(inspector, branch_name)
    if state.special_mode is not SpecialMode.NONE:
        logger.debug("Repository is in %s mode", state.special_mode.value)
        return build_special_mode_label(state, theme).render()

    branch = find_branch(inspector.branch_upstream_pairs(), branch_name)
    if branch is None:
        logger.debug("Branch %s not found among local refs", branch_name)
        return ""

    dirty = collect_dirty_status(inspector)
    sync = collect_sync_status(inspector, branch)
    return build_branch_expression(branch, dirty, sync, theme).render()


def render_prompt(inspector: RepoInspector, theme: Theme) -> str:
    """Render the status with the theme's base color in front."""
    status = render_status(inspector, theme)
    if not status:
        return ""
    return f"{theme.base_color.value}{status}"
