"""Tests for prompt composition against FakeRepoInspector."""

from git_status_prompt.ansi import Color, strip_ansi
from git_status_prompt.formatter import (
    collect_sync_status,
    detect_repository_state,
    render_prompt,
    render_status,
)
from git_status_prompt.gateway.inspector.abc import RebaseFiles
from git_status_prompt.gateway.inspector.fake import FakeRepoInspector
from git_status_prompt.theme import StyleKind, Theme, default_theme
from git_status_prompt.types import BranchInfo, SpecialMode, SyncStatus

GREEN = Color.GREEN.value
LIME = Color.LIME.value
YELLOW = Color.YELLOW.value
RED = Color.RED.value
RESET = Color.RESET.value


def _c(color: str, text: str) -> str:
    return f"{color}{text}{RESET}"


def _branch(name: str, color: str, middle: str = "") -> str:
    return f"{_c(color, '(')}{_c(color, name)}{middle}{_c(color, ')')} "


def _tracking_inspector(listing: list[str] | None, **kwargs: object) -> FakeRepoInspector:
    divergences = {("main", "origin/main"): listing} if listing is not None else {}
    return FakeRepoInspector(
        branches=[BranchInfo(name="main", upstream="origin/main")],
        divergences=divergences,
        **kwargs,  # type: ignore[arg-type]
    )


class TestPreconditions:
    """Validity, commit-existence and branch checks abort the render."""

    def test_not_a_repository_renders_nothing(self) -> None:
        inspector = FakeRepoInspector(is_valid=False)

        assert render_status(inspector, default_theme()) == ""
        assert inspector.probe_calls == ["is_valid"]

    def test_repository_without_commits_renders_placeholder(self) -> None:
        inspector = FakeRepoInspector(has_commits=False)

        result = render_status(inspector, default_theme())

        assert result == _c(RED, "(no commits)")
        assert "current_branch" not in inspector.probe_calls

    def test_unresolved_branch_renders_nothing(self) -> None:
        inspector = FakeRepoInspector(current_branch=None)

        assert render_status(inspector, default_theme()) == ""

    def test_branch_missing_from_local_refs_renders_nothing(self) -> None:
        inspector = FakeRepoInspector(
            current_branch="feature", branches=[BranchInfo(name="main", upstream=None)]
        )

        assert render_status(inspector, default_theme()) == ""

    def test_first_matching_branch_wins(self) -> None:
        inspector = FakeRepoInspector(
            branches=[
                BranchInfo(name="other", upstream="origin/other"),
                BranchInfo(name="main", upstream=None),
                BranchInfo(name="main", upstream="origin/main"),
            ],
            divergences={("main", "origin/main"): ["<abc"]},
        )

        result = render_status(inspector, default_theme())

        assert "[" not in strip_ansi(result)


class TestNormalMode:
    """Branch name, markers and upstream segment."""

    def test_clean_repository_without_upstream(self) -> None:
        result = render_status(FakeRepoInspector(), default_theme())

        assert result == _branch("main", GREEN)

    def test_any_changes_colors_branch_as_dirty(self) -> None:
        result = render_status(FakeRepoInspector(any_changes=True), default_theme())

        assert result == _branch("main", YELLOW)

    def test_untracked_file_only(self) -> None:
        inspector = FakeRepoInspector(any_changes=True, untracked=True)

        result = render_status(inspector, default_theme())

        assert result == _branch("main", YELLOW, _c(RED, "?"))
        plain = strip_ansi(result)
        assert "!" not in plain
        assert "+" not in plain
        assert "$" not in plain

    def test_stash_and_staged_render_in_fixed_order(self) -> None:
        inspector = FakeRepoInspector(stash=True, staged_dirty=True)

        result = render_status(inspector, default_theme())

        assert result == _branch("main", GREEN, _c(LIME, "$") + _c(GREEN, "+"))

    def test_all_markers_order(self) -> None:
        inspector = FakeRepoInspector(
            any_changes=True, tracked_dirty=True, untracked=True, staged_dirty=True, stash=True
        )

        result = render_status(inspector, default_theme())

        assert strip_ansi(result) == "(main$?!+) "

    def test_tracked_dirty_independent_of_any_changes(self) -> None:
        # The fast probe and the tracked diff can disagree; both are shown as reported
        inspector = FakeRepoInspector(any_changes=False, tracked_dirty=True)

        result = render_status(inspector, default_theme())

        assert result == _branch("main", GREEN, _c(YELLOW, "!"))

    def test_behind_and_ahead_counts(self) -> None:
        inspector = _tracking_inspector([">a1", ">b2", ">c3", "<d4", "<e5"])

        result = render_status(inspector, default_theme())

        segment = _c(GREEN, "[") + _c(RED, "3<") + _c(YELLOW, ">2") + _c(GREEN, "]")
        assert result == _branch("main", GREEN, segment)

    def test_even_with_upstream_uses_even_color(self) -> None:
        inspector = _tracking_inspector([])

        result = render_status(inspector, default_theme())

        segment = _c(GREEN, "[") + _c(GREEN, "0<") + _c(GREEN, ">0") + _c(GREEN, "]")
        assert result == _branch("main", GREEN, segment)

    def test_brackets_follow_branch_color(self) -> None:
        inspector = _tracking_inspector(["<a1"], any_changes=True)

        result = render_status(inspector, default_theme())

        assert _c(YELLOW, "[") in result
        assert strip_ansi(result) == "(main[0<>1]) "

    def test_no_upstream_omits_segment(self) -> None:
        inspector = FakeRepoInspector()

        result = render_status(inspector, default_theme())

        assert "[" not in strip_ansi(result)
        assert "divergence" not in inspector.probe_calls

    def test_failed_divergence_listing_omits_segment(self) -> None:
        inspector = _tracking_inspector(None)

        result = render_status(inspector, default_theme())

        assert strip_ansi(result) == "(main) "
        assert "divergence" in inspector.probe_calls

    def test_render_is_idempotent(self) -> None:
        inspector = _tracking_inspector([">a1", "<b2"], untracked=True, stash=True)
        theme = default_theme()

        assert render_status(inspector, theme) == render_status(inspector, theme)


class TestSpecialModes:
    """Merge, rebase and detached HEAD labels."""

    def test_detached_head(self) -> None:
        inspector = FakeRepoInspector(current_branch="HEAD", branches=[], untracked=True)

        result = render_status(inspector, default_theme())

        assert result == _c(RED, "(detached)")
        assert "has_untracked" not in inspector.probe_calls

    def test_merge_in_progress(self) -> None:
        message = "Merge branch 'feature/login' into main\n\n# Conflicts:\n#\tapp.py\n"
        inspector = FakeRepoInspector(merge_message=message)

        result = render_status(inspector, default_theme())

        assert result == _c(RED, "(merging feature/login into main)")

    def test_merge_without_into_suffix(self) -> None:
        inspector = FakeRepoInspector(merge_message="Merge remote-tracking branch 'origin/main'\n")

        result = render_status(inspector, default_theme())

        assert strip_ansi(result) == "(merging origin/main)"

    def test_unrecognized_merge_wording_renders_empty_captures(self) -> None:
        inspector = FakeRepoInspector(merge_message="Merge everything please\n")

        result = render_status(inspector, default_theme())

        assert strip_ansi(result) == "(merging)"

    def test_merge_head_with_non_merge_message_falls_through(self) -> None:
        inspector = FakeRepoInspector(merge_message="Revert something\n")

        result = render_status(inspector, default_theme())

        assert strip_ansi(result) == "(main) "

    def test_merge_takes_priority_over_rebase(self) -> None:
        inspector = FakeRepoInspector(
            merge_message="Merge branch 'a'\n",
            rebase_files=RebaseFiles(head_name="refs/heads/b\n", onto="abc\n"),
        )

        result = render_status(inspector, default_theme())

        assert strip_ansi(result) == "(merging a)"

    def test_rebase_in_progress(self) -> None:
        inspector = FakeRepoInspector(
            current_branch="HEAD",
            rebase_files=RebaseFiles(head_name="refs/heads/topic\n", onto="9fceb02d0ae5\n"),
        )

        result = render_status(inspector, default_theme())

        assert result == _c(RED, "(rebasing topic onto 9fceb02d0ae5)")

    def test_detect_repository_state_normal(self) -> None:
        state = detect_repository_state(FakeRepoInspector(), "main")

        assert state.special_mode is SpecialMode.NONE
        assert state.merge is None
        assert state.rebase is None


class TestCollectSyncStatus:
    """Ahead/behind collection."""

    def test_none_without_upstream(self) -> None:
        inspector = FakeRepoInspector()

        assert collect_sync_status(inspector, BranchInfo(name="main", upstream=None)) is None

    def test_counts_listing(self) -> None:
        inspector = _tracking_inspector([">a", "<b", "<c"])

        result = collect_sync_status(inspector, BranchInfo(name="main", upstream="origin/main"))

        assert result == SyncStatus(behind=1, ahead=2)


class TestRenderPrompt:
    """Leading base color and theme handling."""

    def test_prefixes_base_color(self) -> None:
        result = render_prompt(FakeRepoInspector(), default_theme())

        assert result.startswith(GREEN)
        assert result == GREEN + _branch("main", GREEN)

    def test_empty_outside_repository(self) -> None:
        assert render_prompt(FakeRepoInspector(is_valid=False), default_theme()) == ""

    def test_custom_markers_and_colors(self) -> None:
        theme = default_theme().with_overrides(
            markers={StyleKind.STASHED: "S"},
            colors={StyleKind.STASHED: Color.RED},
            base_color=Color.NONE,
        )
        inspector = FakeRepoInspector(stash=True)

        result = render_prompt(inspector, theme)

        assert result == _branch("main", GREEN, _c(RED, "S"))

    def test_uncolored_theme_emits_no_escapes(self) -> None:
        plain_styles = {kind: Color.NONE for kind in StyleKind}
        theme = Theme().with_overrides(markers={}, colors=plain_styles, base_color=Color.NONE)
        inspector = _tracking_inspector([">a"], untracked=True, any_changes=True)

        result = render_prompt(inspector, theme)

        assert result == "(main?[1<>0]) "

    def test_stripped_output_matches_plain_rendering(self) -> None:
        inspector = _tracking_inspector(
            [">a", ">b", "<c"], any_changes=True, tracked_dirty=True, stash=True
        )
        plain_theme = Theme().with_overrides(
            markers={}, colors={kind: Color.NONE for kind in StyleKind}, base_color=Color.NONE
        )

        colored = render_prompt(inspector, default_theme())

        assert "\x1b" not in strip_ansi(colored)
        assert strip_ansi(colored) == render_prompt(inspector, plain_theme)
